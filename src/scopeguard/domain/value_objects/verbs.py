"""HTTP verbs a rule grants, with the ALL wildcard."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum

from scopeguard.domain.exceptions import InvalidVerb

ALL_LITERAL = "ALL"


class Verb(StrEnum):
    """Concrete verbs. Declaration order is the canonical encoding order."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


_ORDER = {verb: i for i, verb in enumerate(Verb)}


@dataclass(frozen=True)
class VerbSet:
    """Set of verbs, or the wildcard which also covers verbs added later.

    A wildcard set never carries explicit verbs: constructing from names that
    include ALL yields the bare wildcard.
    """

    verbs: frozenset[Verb] = frozenset()
    wildcard: bool = False

    def __post_init__(self) -> None:
        if self.wildcard and self.verbs:
            object.__setattr__(self, "verbs", frozenset())

    @classmethod
    def all(cls) -> "VerbSet":
        return cls(wildcard=True)

    @classmethod
    def of(cls, *names: str | Verb) -> "VerbSet":
        """Build from verb names, e.g. VerbSet.of("GET", "POST")."""
        return cls.parse(names)

    @classmethod
    def parse(cls, names: Iterable[str | Verb]) -> "VerbSet":
        """Build from an iterable of names; raises InvalidVerb on unknown ones."""
        verbs: set[Verb] = set()
        wildcard = False
        for name in names:
            if name == ALL_LITERAL:
                wildcard = True
                continue
            try:
                verbs.add(Verb(name))
            except ValueError:
                raise InvalidVerb(str(name)) from None
        if wildcard:
            return cls(wildcard=True)
        return cls(verbs=frozenset(verbs))

    def contains(self, verb: Verb | str) -> bool:
        if self.wildcard:
            return True
        try:
            return Verb(verb) in self.verbs
        except ValueError:
            return False

    def is_subset_of(self, other: "VerbSet") -> bool:
        # A wildcard covers verbs not yet defined, so only a wildcard covers it.
        if other.wildcard:
            return True
        if self.wildcard:
            return False
        return self.verbs <= other.verbs

    def is_empty(self) -> bool:
        return not self.wildcard and not self.verbs

    def to_list(self) -> list[str]:
        """Names in canonical order, or ["ALL"] for the wildcard."""
        if self.wildcard:
            return [ALL_LITERAL]
        return [v.value for v in sorted(self.verbs, key=_ORDER.__getitem__)]

    def __iter__(self) -> Iterator[Verb]:
        if self.wildcard:
            return iter(Verb)
        return iter(sorted(self.verbs, key=_ORDER.__getitem__))

    def __str__(self) -> str:
        return ",".join(self.to_list())
