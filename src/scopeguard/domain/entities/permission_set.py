"""Permission set - union of rules, with subset containment."""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from scopeguard.domain.entities.rule import Rule
from scopeguard.domain.exceptions import InvalidRule


class PermissionSet:
    """Immutable, ordered collection of rules.

    The authority of a set is the union of its rules' grants. Rule order is
    kept for display and encoding but carries no meaning. Several rules on
    the same (type, selector) are allowed.
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._rules: tuple[Rule, ...] = tuple(rules)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __bool__(self) -> bool:
        return bool(self._rules)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PermissionSet):
            return NotImplemented
        return self._rules == other._rules

    def __hash__(self) -> int:
        return hash(self._rules)

    def __repr__(self) -> str:
        return f"PermissionSet({list(self._rules)!r})"

    def is_subset_of(self, parent: "PermissionSet") -> bool:
        """True iff every rule here is covered by one single rule of `parent`.

        Coverage is never assembled from several parent rules: a child rule
        granting GET and POST is rejected by a parent holding GET and POST in
        two separate rules.
        """
        return all(
            any(rule.is_subset_of(candidate) for candidate in parent._rules)
            for rule in self._rules
        )

    def is_equivalent_to(self, other: "PermissionSet") -> bool:
        """Same authority: each set is a subset of the other."""
        return self.is_subset_of(other) and other.is_subset_of(self)

    def with_rule(self, rule: Rule) -> "PermissionSet":
        return PermissionSet((*self._rules, rule))

    def union(self, other: "PermissionSet") -> "PermissionSet":
        return PermissionSet((*self._rules, *other._rules))

    def to_scope(self) -> str:
        """Encode as a space separated scope string."""
        from scopeguard.domain.scope_codec import marshal_scope

        return marshal_scope(self)

    @classmethod
    def from_scope(cls, scope: str) -> "PermissionSet":
        """Decode a scope string; raises InvalidScope."""
        from scopeguard.domain.scope_codec import unmarshal_scope

        return unmarshal_scope(scope)

    def to_list(self) -> list[dict[str, Any]]:
        return [rule.to_dict() for rule in self._rules]

    @classmethod
    def from_json(cls, data: Any) -> "PermissionSet":
        """Build from a JSON list of rules, or a mapping of title to rule."""
        if data is None:
            return cls()
        if isinstance(data, Mapping):
            data = list(data.values())
        if not isinstance(data, list):
            raise InvalidRule("permissions must be a list or an object of rules")
        rules = []
        for item in data:
            if not isinstance(item, Mapping):
                raise InvalidRule("each rule must be an object")
            rules.append(Rule.from_dict(item))
        return cls(rules)
