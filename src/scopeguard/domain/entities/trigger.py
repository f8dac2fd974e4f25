"""Event trigger watching the documents a sharing rule covers."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from scopeguard.domain.entities.rule import Rule

EVENT_TRIGGER_TYPE = "@event"
ALL_EVENTS = "CREATED,UPDATED,DELETED"
DELETED_EVENT = "DELETED"


@dataclass(frozen=True)
class SharingMessage:
    """Payload handed to the sharing worker when a watched document changes."""

    sharing_id: str
    rule: Rule

    def to_dict(self) -> dict[str, Any]:
        return {"sharing_id": self.sharing_id, "rule": self.rule.to_dict()}


@dataclass
class Trigger:
    """Scheduler trigger; the scheduler itself lives outside this service."""

    id: str
    type: str
    worker_type: str
    domain: str
    arguments: str
    message: dict[str, Any]
    created_at: datetime
    options: dict[str, Any] = field(default_factory=dict)


def event_arguments(rule: Rule, deletions_only: bool = False) -> str:
    """Event filter for a rule, ``<type>:<events>:<values>[:<selector>]``.

    `deletions_only` restricts a selector-less rule to DELETED events, used on
    the recipient side of a one-way sharing to learn about revocations.
    """
    values = ",".join(rule.values)
    if rule.selector:
        return f"{rule.type}:{ALL_EVENTS}:{values}:{rule.selector}"
    if deletions_only:
        return f"{rule.type}:{DELETED_EVENT}:{values}"
    return f"{rule.type}:{ALL_EVENTS}:{values}"
