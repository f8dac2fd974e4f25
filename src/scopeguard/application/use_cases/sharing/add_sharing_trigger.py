"""Add sharing trigger use case."""

from datetime import UTC, datetime
from uuid import uuid4

from scopeguard.domain.entities import Rule, SharingMessage, Trigger, event_arguments
from scopeguard.domain.entities.trigger import EVENT_TRIGGER_TYPE
from scopeguard.logging import get_logger

logger = get_logger(__name__)

DEFAULT_WORKER_TYPE = "sharingupdates"


class AddSharingTriggerUseCase:
    """Register a trigger firing on changes to the documents a rule shares."""

    def __init__(
        self,
        unit_of_work_factory: type,
        worker_type: str = DEFAULT_WORKER_TYPE,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._worker_type = worker_type

    async def execute(
        self,
        domain: str,
        sharing_id: str,
        rule: Rule,
        deletions_only: bool = False,
    ) -> Trigger:
        trigger = Trigger(
            id=uuid4().hex,
            type=EVENT_TRIGGER_TYPE,
            worker_type=self._worker_type,
            domain=domain,
            arguments=event_arguments(rule, deletions_only),
            message=SharingMessage(sharing_id=sharing_id, rule=rule).to_dict(),
            created_at=datetime.now(UTC),
        )
        async with self._uow_factory() as uow:
            await uow.triggers.create(trigger)

        logger.info(
            "sharing_trigger_created",
            sharing_id=sharing_id,
            domain=domain,
            arguments=trigger.arguments,
        )
        return trigger
