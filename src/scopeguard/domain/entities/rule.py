"""Rule entity - one access grant on a document type."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from scopeguard.domain.exceptions import InvalidRule
from scopeguard.domain.value_objects import VerbSet


@dataclass(frozen=True)
class Rule:
    """Grant of `verbs` on documents of `type`.

    `values` restricts the grant to documents whose `selector` field (the
    document id when the selector is empty) is one of the listed values.
    An empty `values` tuple means any document of the type.
    """

    type: str
    verbs: VerbSet
    values: tuple[str, ...] = ()
    selector: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.values, tuple):
            object.__setattr__(self, "values", tuple(self.values))
        if not isinstance(self.type, str) or not self.type:
            raise InvalidRule("rule type must be a non-empty string")
        if not isinstance(self.selector, str) or not isinstance(self.description, str):
            raise InvalidRule(f"rule on {self.type} has a non-string selector or description")
        if any(not isinstance(v, str) for v in self.values):
            raise InvalidRule(f"rule on {self.type} has a non-string value")
        if self.verbs.is_empty():
            raise InvalidRule(f"rule on {self.type} grants no verb")
        if any(not v for v in self.values):
            raise InvalidRule(f"rule on {self.type} has an empty value")
        if self.selector and not self.values:
            raise InvalidRule(f"rule on {self.type} has selector {self.selector!r} but no values")

    def matches(self, doc_type: str, selector: str) -> bool:
        """Whether this rule is comparable with a rule on (doc_type, selector)."""
        return self.type == doc_type and self.selector == selector

    def values_subset_of(self, parent: "Rule") -> bool:
        if not parent.values:
            return True
        # An unrestricted rule is never covered by a restricted one.
        if not self.values:
            return False
        allowed = set(parent.values)
        return all(v in allowed for v in self.values)

    def is_subset_of(self, parent: "Rule") -> bool:
        return (
            self.matches(parent.type, parent.selector)
            and self.verbs.is_subset_of(parent.verbs)
            and self.values_subset_of(parent)
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape used for storage and the HTTP API."""
        result: dict[str, Any] = {"type": self.type, "verbs": self.verbs.to_list()}
        if self.values:
            result["values"] = list(self.values)
        if self.selector:
            result["selector"] = self.selector
        if self.description:
            result["description"] = self.description
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Rule":
        """Create Rule from its JSON shape."""
        try:
            doc_type = data["type"]
        except KeyError:
            raise InvalidRule("rule is missing 'type'") from None
        verbs = data.get("verbs") or []
        if isinstance(verbs, str):
            verbs = [verbs]
        if not isinstance(verbs, list) or not all(isinstance(v, str) for v in verbs):
            raise InvalidRule("rule 'verbs' must be a string or a list of strings")
        return cls(
            type=doc_type,
            verbs=VerbSet.parse(verbs),
            values=tuple(_as_list(data.get("values") or [])),
            selector=data.get("selector") or "",
            description=data.get("description") or "",
        )


def _as_list(values: Any) -> list[Any]:
    if not isinstance(values, list):
        raise InvalidRule("rule 'values' must be a list")
    return values
