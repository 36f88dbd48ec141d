"""
flagdec/decoder.py — turn one 32-bit word into the names composing it.

The decode loop walks a domain's entries in declared order.  Sub-fields
are matched as a whole (several bits encode one of a few exclusive states)
and their bits are cleared whether or not the value has a name, so an
unknown field value never leaks into the single-bit pass or into ``EXTRA``.
Whatever is left once every entry has been consumed is reported as
``EXTRA(0x%08x)``.

Decoding is a pure function of ``(domain, value)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Tuple

from flagdec.registry import WORD_MASK, BitDef, Domain, SubField


class DecodedToken(NamedTuple):
    """One output token and the bits of the word it accounts for."""
    text: str
    bits: int


@dataclass(frozen=True)
class DecodedResult:
    """Outcome of decoding one value against one domain."""
    domain: Domain
    value: int
    parts: Tuple[DecodedToken, ...]
    residual: int = 0

    @property
    def tokens(self) -> Tuple[str, ...]:
        return tuple(p.text for p in self.parts)

    @property
    def matched(self) -> int:
        """Bits accounted for by a known definition."""
        return self.value & ~self.residual

    def text(self, separator: str = " | ") -> str:
        return separator.join(self.tokens)


def extra_token(residual: int) -> str:
    return f"EXTRA(0x{residual:08x})"


def unmapped_token(subfield: SubField, field_value: int) -> str:
    return f"{subfield.name}({field_value:02x})"


def decode(domain: Domain, value: int) -> DecodedResult:
    """
    Decode *value* against *domain*.

    Parameters
    ----------
    domain:
        Table to decode against.
    value:
        The captured word.  Only its low 32 bits are considered.

    Returns
    -------
    DecodedResult
        Tokens in the domain's declared order.  A zero word yields the
        domain's idle label (or ``0``), never an empty token list.
    """
    value &= WORD_MASK
    if value == 0:
        return DecodedResult(domain, 0, (DecodedToken(domain.empty_token, 0),))

    remaining = value
    parts: List[DecodedToken] = []

    for entry in domain.entries:
        if isinstance(entry, SubField):
            field_value = remaining & entry.mask
            if field_value == 0 and not entry.show_zero:
                continue
            name = entry.lookup(field_value)
            if name is None:
                name = unmapped_token(entry, field_value)
            parts.append(DecodedToken(name, field_value))
            remaining &= ~entry.mask
        elif isinstance(entry, BitDef):
            if remaining & entry.mask:
                parts.append(DecodedToken(entry.name, entry.mask))
                remaining &= ~entry.mask

    if remaining:
        parts.append(DecodedToken(extra_token(remaining), remaining))

    return DecodedResult(domain, value, tuple(parts), remaining)


def decode_all(domains: Iterable[Domain], value: int) -> List[DecodedResult]:
    """Decode *value* once per domain, keeping the order of *domains*."""
    return [decode(domain, value) for domain in domains]
