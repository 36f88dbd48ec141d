"""
flagdec/selector.py — choose which domains to decode against.

Keywords are taken greedily from the front of the argument list.  The
first token that is not a keyword ends the list and is handed to the value
source untouched; it is not an error at this stage.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Iterator, List, Sequence, Tuple

from flagdec.domains import REGISTRY
from flagdec.registry import Domain, DomainRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    """
    The set of domains chosen for a run.

    Iteration always follows registry order, not the order the keywords
    were typed in.
    """
    registry: DomainRegistry
    keywords: FrozenSet[str]

    @property
    def is_all(self) -> bool:
        return self.keywords == frozenset(self.registry.keywords())

    @property
    def domains(self) -> Tuple[Domain, ...]:
        return tuple(d for d in self.registry.list_domains() if d.keyword in self.keywords)

    def __iter__(self) -> Iterator[Domain]:
        return iter(self.domains)

    def __len__(self) -> int:
        return len(self.domains)

    def __contains__(self, keyword: object) -> bool:
        return keyword in self.keywords

    @classmethod
    def all(cls, registry: DomainRegistry = REGISTRY) -> "Selection":
        return cls(registry, frozenset(registry.keywords()))

    @classmethod
    def strict(cls, keywords: Iterable[str], registry: DomainRegistry = REGISTRY) -> "Selection":
        """Build a selection where every keyword must exist (raises ``UnrecognizedDomainError``)."""
        chosen = frozenset(registry.require(k).keyword for k in keywords)
        if not chosen:
            return cls.all(registry)
        return cls(registry, chosen)


def resolve_selection(
    tokens: Sequence[str],
    registry: DomainRegistry = REGISTRY,
) -> Tuple[Selection, List[str]]:
    """
    Consume leading domain keywords from *tokens*.

    Returns the selection and the tokens left over for the value source.
    No keyword at all selects every domain.
    """
    chosen: List[str] = []
    index = 0
    while index < len(tokens) and tokens[index] in registry:
        chosen.append(tokens[index])
        index += 1

    if not chosen:
        selection = Selection.all(registry)
    else:
        selection = Selection(registry, frozenset(chosen))

    logger.debug(
        "selected domains: %s",
        ", ".join(d.keyword for d in selection) if not selection.is_all else "all",
    )
    return selection, list(tokens[index:])
