"""Immutable lookup tables for nutrition facts and ingredient swaps."""

import unicodedata
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from fitswap.domain.nutrition import NutritionFacts
from fitswap.domain.recipe import Goal

_MIN_REVERSE_MATCH_LENGTH = 3


def normalize_name(name: str) -> str:
    """Lowercase, trim, collapse whitespace and strip accents."""
    decomposed = unicodedata.normalize("NFKD", name.lower())
    folded = "".join(char for char in decomposed if not unicodedata.combining(char))
    return " ".join(folded.split())


def _same_word(left: str, right: str) -> bool:
    return left == right or left + "s" == right or right + "s" == left


def _contains_words(haystack: list[str], needle: list[str]) -> bool:
    """True when needle occurs as a contiguous run of words in haystack."""
    size = len(needle)
    if not size or size > len(haystack):
        return False
    return any(
        all(_same_word(a, b) for a, b in zip(haystack[i : i + size], needle))
        for i in range(len(haystack) - size + 1)
    )


def match_key(
    name: str, keys: Iterable[str], aliases: Mapping[str, str] | None = None
) -> str | None:
    """Resolve a free-form name to a table key.

    Order: exact key, alias, longest key contained in the name, then longest
    key containing the name, alphabetical on ties. Containment is on whole
    words with a trailing "s" ignored, so "ovos" finds "ovo" but "sal" never
    finds "salmao".
    Returns None when nothing matches.
    """
    normalized = normalize_name(name)
    if not normalized:
        return None
    by_normalized = {normalize_name(key): key for key in keys}
    if normalized in by_normalized:
        return by_normalized[normalized]
    if aliases:
        normalized_aliases = {normalize_name(k): v for k, v in aliases.items()}
        target = normalized_aliases.get(normalized)
        if target is not None and normalize_name(target) in by_normalized:
            return by_normalized[normalize_name(target)]

    words = normalized.split()
    candidates = [
        key_norm
        for key_norm in by_normalized
        if _contains_words(words, key_norm.split())
    ]
    if not candidates and len(normalized) >= _MIN_REVERSE_MATCH_LENGTH:
        candidates = [
            key_norm
            for key_norm in by_normalized
            if _contains_words(key_norm.split(), words)
        ]
    if not candidates:
        return None
    best = min(candidates, key=lambda key_norm: (-len(key_norm), key_norm))
    return by_normalized[best]


@dataclass(frozen=True)
class NutritionTable:
    """Per-100 g nutrition rows keyed by ingredient name."""

    rows: Mapping[str, NutritionFacts]
    default: NutritionFacts
    aliases: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", MappingProxyType(dict(self.rows)))
        object.__setattr__(self, "aliases", MappingProxyType(dict(self.aliases)))

    def match(self, name: str) -> str | None:
        return match_key(name, self.rows.keys(), self.aliases)

    def lookup(self, name: str) -> NutritionFacts:
        """Return the matching row or the default estimate."""
        key = self.match(name)
        if key is None:
            return self.default
        return self.rows[key]


@dataclass(frozen=True)
class SwapCandidate:
    """Replacement option for an ingredient."""

    name: str
    reason: str
    goal: Goal | None = None
    conflicts: frozenset[str] = frozenset()

    def suits(self, goal: Goal) -> bool:
        return self.goal is None or self.goal == goal

    def allowed(self, restrictions: Iterable[str]) -> bool:
        return not (self.conflicts & {r.strip().lower() for r in restrictions})


@dataclass(frozen=True)
class SwapTable:
    """Substitution candidates keyed by the ingredient they replace."""

    rows: Mapping[str, tuple[SwapCandidate, ...]]
    aliases: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "rows",
            MappingProxyType({key: tuple(value) for key, value in self.rows.items()}),
        )
        object.__setattr__(self, "aliases", MappingProxyType(dict(self.aliases)))

    def match(self, name: str) -> str | None:
        return match_key(name, self.rows.keys(), self.aliases)

    def candidates(self, name: str) -> tuple[SwapCandidate, ...]:
        """Return the candidates for a name, empty when unmatched."""
        key = self.match(name)
        if key is None:
            return ()
        return self.rows[key]
