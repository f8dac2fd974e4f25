"""PostgreSQL permission repository implementation."""

from collections.abc import Sequence
from typing import Any
from uuid import uuid4

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation
from psycopg.types.json import Jsonb

from scopeguard.domain.entities import Permission, PermissionSet
from scopeguard.domain.exceptions import AlreadyExists, RevisionConflict
from scopeguard.domain.value_objects import PermissionType

_COLUMNS = "p.id, p.rev, p.type, p.source_id, p.permissions, p.expires_at, p.codes"


def _next_rev(rev: str | None) -> str:
    """CouchDB-style revision ``<generation>-<random>``."""
    generation = 0
    if rev:
        head, _, _ = rev.partition("-")
        if head.isdigit():
            generation = int(head)
    return f"{generation + 1}-{uuid4().hex}"


def _row_to_permission(r: Sequence[Any]) -> Permission:
    return Permission(
        id=r[0],
        rev=r[1],
        type=PermissionType(r[2]),
        source_id=r[3],
        permissions=PermissionSet.from_json(r[4]),
        expires_at=r[5],
        codes=dict(r[6] or {}),
    )


class PostgresPermissionRepository:
    """Permission repository implementation.

    Redemption codes are also written to ``permission_code`` (one row per
    code) so a code lookup is a single indexed query.
    """

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, permission_id: str) -> Permission | None:
        """Get permission by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission p WHERE p.id = %s",
            (permission_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_permission(r)

    async def find_by_source(
        self, source_id: str, type: PermissionType | None = None
    ) -> list[Permission]:
        """List permissions for source, optionally of one type."""
        if type is None:
            cur = await self._conn.execute(
                f"SELECT {_COLUMNS} FROM permission p WHERE p.source_id = %s ORDER BY p.id",
                (source_id,),
            )
        else:
            cur = await self._conn.execute(
                f"SELECT {_COLUMNS} FROM permission p "
                "WHERE p.source_id = %s AND p.type = %s ORDER BY p.id",
                (source_id, type.value),
            )
        rows = await cur.fetchall()
        return [_row_to_permission(r) for r in rows]

    async def find_by_code(self, code: str) -> list[Permission]:
        """List permissions holding `code` among their redemption codes."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission p "
            "WHERE p.id IN (SELECT c.permission_id FROM permission_code c WHERE c.code = %s) "
            "ORDER BY p.id",
            (code,),
        )
        rows = await cur.fetchall()
        return [_row_to_permission(r) for r in rows]

    async def create(self, permission: Permission) -> Permission:
        """Create permission; assigns id and rev."""
        permission_id = permission.id or uuid4().hex
        rev = _next_rev(None)
        try:
            await self._conn.execute(
                "INSERT INTO permission (id, rev, type, source_id, permissions, expires_at, codes) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s)",
                (
                    permission_id,
                    rev,
                    permission.type.value,
                    permission.source_id,
                    Jsonb(permission.permissions.to_list()),
                    permission.expires_at,
                    Jsonb(permission.codes),
                ),
            )
        except UniqueViolation as e:
            raise AlreadyExists(
                f"permission doc already exists for {permission.source_id}"
            ) from e
        await self._write_codes(permission_id, permission.codes)
        permission.id = permission_id
        permission.rev = rev
        return permission

    async def update(self, permission: Permission) -> Permission:
        """Update permission if `rev` is current; bumps rev."""
        rev = _next_rev(permission.rev)
        cur = await self._conn.execute(
            "UPDATE permission SET rev=%s, type=%s, source_id=%s, permissions=%s, "
            "expires_at=%s, codes=%s WHERE id=%s AND rev=%s",
            (
                rev,
                permission.type.value,
                permission.source_id,
                Jsonb(permission.permissions.to_list()),
                permission.expires_at,
                Jsonb(permission.codes),
                permission.id,
                permission.rev,
            ),
        )
        if cur.rowcount == 0:
            raise RevisionConflict(f"permission {permission.id} is not at revision {permission.rev}")
        await self._conn.execute(
            "DELETE FROM permission_code WHERE permission_id = %s",
            (permission.id,),
        )
        await self._write_codes(permission.id, permission.codes)
        permission.rev = rev
        return permission

    async def delete(self, permission_id: str) -> None:
        """Delete permission; codes go with it (ON DELETE CASCADE)."""
        await self._conn.execute(
            "DELETE FROM permission WHERE id = %s",
            (permission_id,),
        )

    async def _write_codes(self, permission_id: str, codes: dict[str, str]) -> None:
        if not codes:
            return
        async with self._conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO permission_code (permission_id, key, code) VALUES (%s, %s, %s)",
                [(permission_id, key, code) for key, code in codes.items()],
            )
