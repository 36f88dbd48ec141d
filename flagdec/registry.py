"""
flagdec/registry.py — flag domain definitions and the registry holding them.

A *domain* is one kind of state word (``conn->flags``, ``task->state``, ...).
It is described by an ordered list of entries, each either a single-bit
flag (:class:`BitDef`) or a multi-bit enumerated range (:class:`SubField`).
Entry order is the order tokens are printed in; it is part of the output
contract, so tables are declared once and never reordered at runtime.

Tables are plain data.  Building a registry never validates or fails:
malformed tables are caught by :func:`check_domain` / :meth:`DomainRegistry.check`,
which the test suite runs over every shipped table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from flagdec.errors import UnrecognizedDomainError

WORD_MASK: int = 0xFFFFFFFF


# ===================================================================== #
#  Definitions                                                           #
# ===================================================================== #

@dataclass(frozen=True, slots=True)
class BitDef:
    """A boolean flag occupying exactly one bit of the word."""
    name: str
    mask: int


@dataclass(frozen=True, slots=True)
class SubField:
    """
    A multi-bit enumerated range inside a word.

    ``values`` holds ``(field value, name)`` pairs, the value *masked* but
    not shifted.  A mapping is accepted and frozen into pairs.  A zero field
    is skipped unless ``show_zero`` is set, in which case the name of 0 is
    printed.  A value with no name is printed as ``NAME(<hex>)`` with only
    the field's own bits.
    """
    name: str
    mask: int
    values: Tuple[Tuple[int, str], ...] = ()
    show_zero: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.values, Mapping):
            object.__setattr__(self, "values", tuple(self.values.items()))
        else:
            object.__setattr__(self, "values", tuple(self.values))

    def lookup(self, field_value: int) -> Optional[str]:
        for value, name in self.values:
            if value == field_value:
                return name
        return None

    def names(self) -> Tuple[str, ...]:
        return tuple(name for _, name in self.values)


Entry = Union[BitDef, SubField]


def enum_field(name: str, mask: int, *values: Tuple[str, int], show_zero: bool = False) -> SubField:
    """Build a :class:`SubField` from ``(name, value)`` pairs, keeping their order."""
    return SubField(
        name=name,
        mask=mask,
        values=tuple((value, label) for label, value in values),
        show_zero=show_zero,
    )


@dataclass(frozen=True)
class Domain:
    """
    One flag namespace.

    Attributes
    ----------
    keyword:
        Command-line name (``conn``).  Unique, case-sensitive.
    label:
        Name shown in reports (``conn->flags``).
    entries:
        Bit and sub-field definitions in print order.
    zero_label:
        Name printed for a zero word (``TASK_SLEEPING``); ``None`` prints ``0``.
    description:
        One-line human description, used by ``--list-domains``.
    """
    keyword: str
    label: str
    entries: Tuple[Entry, ...]
    zero_label: Optional[str] = None
    description: str = ""

    @property
    def bits(self) -> Tuple[BitDef, ...]:
        return tuple(e for e in self.entries if isinstance(e, BitDef))

    @property
    def subfields(self) -> Tuple[SubField, ...]:
        return tuple(e for e in self.entries if isinstance(e, SubField))

    @property
    def known_mask(self) -> int:
        mask = 0
        for entry in self.entries:
            mask |= entry.mask
        return mask

    @property
    def empty_token(self) -> str:
        """Token printed when the whole word is zero."""
        return self.zero_label if self.zero_label is not None else "0"


def bits(*names_and_masks: Tuple[str, int]) -> Tuple[BitDef, ...]:
    """Shorthand for a run of :class:`BitDef` entries."""
    return tuple(BitDef(name, mask) for name, mask in names_and_masks)


# ===================================================================== #
#  Table checks                                                          #
# ===================================================================== #

def check_domain(domain: Domain) -> List[str]:
    """
    Return the list of problems found in *domain*'s table.

    An empty list means the table is well formed: every single-bit mask has
    exactly one bit set and fits in 32 bits, no two masks in the domain
    overlap, and sub-field values stay inside their mask.
    """
    problems: List[str] = []
    seen: Dict[str, int] = {}
    claimed = 0

    if not domain.entries:
        problems.append(f"{domain.keyword}: no definitions")

    for entry in domain.entries:
        where = f"{domain.keyword}.{entry.name}"
        if entry.mask <= 0 or entry.mask & ~WORD_MASK:
            problems.append(f"{where}: mask 0x{entry.mask:x} is not a 32-bit mask")
        if isinstance(entry, BitDef) and entry.mask & (entry.mask - 1):
            problems.append(f"{where}: mask 0x{entry.mask:08x} has more than one bit set")
        if entry.mask & claimed:
            problems.append(
                f"{where}: mask 0x{entry.mask:08x} overlaps 0x{entry.mask & claimed:08x}"
            )
        claimed |= entry.mask
        if entry.name in seen:
            problems.append(f"{where}: duplicate name")
        seen[entry.name] = entry.mask

        if isinstance(entry, SubField):
            if len(entry.values) == 0:
                problems.append(f"{where}: sub-field has no values")
            for value, label in entry.values:
                if value & ~entry.mask:
                    problems.append(f"{where}: value {label}=0x{value:x} lies outside the mask")
            if entry.show_zero and entry.lookup(0) is None:
                problems.append(f"{where}: show_zero set but no name for 0")

    if domain.zero_label is not None and not domain.zero_label:
        problems.append(f"{domain.keyword}: empty zero label")

    return problems


# ===================================================================== #
#  Registry                                                              #
# ===================================================================== #

class DomainRegistry:
    """
    Ordered, read-only collection of :class:`Domain` objects.

    Declaration order is the order domains are printed in, whatever order
    the user selected them in.
    """

    def __init__(self, domains: Sequence[Domain]) -> None:
        self._domains: Tuple[Domain, ...] = tuple(domains)
        self._by_keyword: Dict[str, Domain] = {}
        for domain in self._domains:
            self._by_keyword.setdefault(domain.keyword, domain)

    def list_domains(self) -> Tuple[Domain, ...]:
        return self._domains

    def lookup_domain(self, keyword: str) -> Optional[Domain]:
        """Exact, case-sensitive lookup; ``None`` when *keyword* is unknown."""
        return self._by_keyword.get(keyword)

    def require(self, keyword: str) -> Domain:
        """Like :meth:`lookup_domain` but raise :class:`UnrecognizedDomainError`."""
        domain = self._by_keyword.get(keyword)
        if domain is None:
            raise UnrecognizedDomainError(keyword, known=self.keywords())
        return domain

    def keywords(self) -> List[str]:
        return [d.keyword for d in self._domains]

    def check(self) -> List[str]:
        """Return every table problem across the registry (see :func:`check_domain`)."""
        problems: List[str] = []
        keywords: Dict[str, int] = {}
        for domain in self._domains:
            keywords[domain.keyword] = keywords.get(domain.keyword, 0) + 1
            problems.extend(check_domain(domain))
        for keyword, count in keywords.items():
            if count > 1:
                problems.append(f"{keyword}: keyword declared {count} times")
        return problems

    def __contains__(self, keyword: object) -> bool:
        return keyword in self._by_keyword

    def __iter__(self) -> Iterator[Domain]:
        return iter(self._domains)

    def __len__(self) -> int:
        return len(self._domains)
