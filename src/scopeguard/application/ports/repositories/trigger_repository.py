"""Trigger repository port."""

from typing import Protocol

from scopeguard.domain.entities import Trigger


class TriggerRepository(Protocol):
    """Port for handing triggers to the job scheduler."""

    async def create(self, trigger: Trigger) -> Trigger: ...
