"""PostgreSQL trigger repository implementation."""

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from scopeguard.domain.entities import Trigger


class PostgresTriggerRepository:
    """Writes triggers to the table the job scheduler polls."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def create(self, trigger: Trigger) -> Trigger:
        """Create trigger."""
        await self._conn.execute(
            "INSERT INTO trigger (id, type, worker_type, domain, arguments, message, options, created_at) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
            (
                trigger.id,
                trigger.type,
                trigger.worker_type,
                trigger.domain,
                trigger.arguments,
                Jsonb(trigger.message),
                Jsonb(trigger.options),
                trigger.created_at,
            ),
        )
        return trigger
