"""Pytest fixtures for scopeguard tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace
from uuid import uuid4

import pytest

from scopeguard.domain.entities import Permission, PermissionSet, Rule, Trigger
from scopeguard.domain.exceptions import AlreadyExists, RevisionConflict
from scopeguard.domain.value_objects import PermissionType, VerbSet


# --- Fake repositories ---


class FakePermissionRepository:
    """In-memory permission repository with the same guarantees as Postgres."""

    def __init__(self) -> None:
        self._by_id: dict[str, Permission] = {}

    def _rev(self, rev: str | None) -> str:
        generation = int(rev.split("-", 1)[0]) if rev else 0
        return f"{generation + 1}-{uuid4().hex}"

    async def get_by_id(self, permission_id: str) -> Permission | None:
        return self._by_id.get(permission_id)

    async def find_by_source(
        self, source_id: str, type: PermissionType | None = None
    ) -> list[Permission]:
        return [
            p
            for p in self._by_id.values()
            if p.source_id == source_id and (type is None or p.type == type)
        ]

    async def find_by_code(self, code: str) -> list[Permission]:
        return [p for p in self._by_id.values() if code in p.codes.values()]

    async def create(self, permission: Permission) -> Permission:
        if permission.type == PermissionType.APPLICATION and any(
            p.type == PermissionType.APPLICATION and p.source_id == permission.source_id
            for p in self._by_id.values()
        ):
            raise AlreadyExists(f"permission doc already exists for {permission.source_id}")
        permission.id = permission.id or uuid4().hex
        permission.rev = self._rev(None)
        self._by_id[permission.id] = replace(permission, codes=dict(permission.codes))
        return permission

    async def update(self, permission: Permission) -> Permission:
        current = self._by_id.get(permission.id)
        if current is None or current.rev != permission.rev:
            raise RevisionConflict(f"permission {permission.id} is not at revision {permission.rev}")
        permission.rev = self._rev(permission.rev)
        self._by_id[permission.id] = replace(permission, codes=dict(permission.codes))
        return permission

    async def delete(self, permission_id: str) -> None:
        self._by_id.pop(permission_id, None)

    def add(self, permission: Permission) -> Permission:
        """Helper to store a record as-is, bypassing create checks (for tests)."""
        permission.id = permission.id or uuid4().hex
        permission.rev = permission.rev or "1-seed"
        self._by_id[permission.id] = permission
        return permission


class FakeTriggerRepository:
    """In-memory trigger repository."""

    def __init__(self) -> None:
        self.created: list[Trigger] = []

    async def create(self, trigger: Trigger) -> Trigger:
        self.created.append(trigger)
        return trigger


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.permissions = FakePermissionRepository()
        self.triggers = FakeTriggerRepository()

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def make_factory(uow: FakeUnitOfWork):
    """Factory yielding the same UoW on every call, so state survives across calls."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


# --- Builders ---


def rule(
    doc_type: str = "io.cozy.files",
    verbs: str | tuple[str, ...] = "GET",
    values: tuple[str, ...] = (),
    selector: str = "",
) -> Rule:
    """Short rule builder: rule("io.cozy.files", ("GET", "POST"), ("a",))."""
    names = (verbs,) if isinstance(verbs, str) else verbs
    return Rule(type=doc_type, verbs=VerbSet.parse(names), values=values, selector=selector)


def app_permission(slug: str = "photos", *rules: Rule) -> Permission:
    return Permission(
        type=PermissionType.APPLICATION,
        source_id=f"io.cozy.apps/{slug}",
        permissions=PermissionSet(rules or [rule("io.cozy.files", "ALL")]),
    )


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager with the test's FakeUnitOfWork."""
    return make_factory(fake_uow)
