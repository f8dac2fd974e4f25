"""Domain exceptions."""


class ScopeGuardError(Exception):
    """Base exception for scopeguard."""

    pass


class ValidationError(ScopeGuardError):
    """Validation failed for input data."""

    pass


class InvalidVerb(ValidationError):
    """Verb name is not one of GET, POST, PUT, PATCH, DELETE or ALL."""

    def __init__(self, name: str) -> None:
        super().__init__(f"invalid verb: {name!r}")
        self.name = name


class InvalidRule(ValidationError):
    """Rule fields are inconsistent (empty type, no verbs, ...)."""

    pass


class InvalidScope(ValidationError):
    """Scope token is malformed or a rule cannot be encoded as a token."""

    def __init__(self, token: str, reason: str) -> None:
        super().__init__(f"invalid scope token {token!r}: {reason}")
        self.token = token
        self.reason = reason


class PermissionDenied(ScopeGuardError):
    """Requested grant is refused by policy."""

    pass


class NotSubset(PermissionDenied):
    """Derived permission set is larger than its parent."""

    def __init__(self, message: str = "attempt to create a larger permission set") -> None:
        super().__init__(message)


class OnlyAppCanDerive(PermissionDenied):
    """Only application permissions may be the parent of a derived set."""

    def __init__(self, message: str = "only apps can create sharing permissions") -> None:
        super().__init__(message)


class NotFound(ScopeGuardError):
    """Requested resource was not found."""

    pass


class AlreadyExists(ScopeGuardError):
    """A record of the same kind already exists for this owner."""

    pass


class RevisionConflict(ScopeGuardError):
    """Update was attempted with a stale revision."""

    pass


class InconsistentState(ScopeGuardError):
    """Stored data violates an invariant (e.g. a redemption code used twice)."""

    pass


class DestroyIncomplete(ScopeGuardError):
    """Bulk deletion stopped midway; `remaining` lists ids still stored."""

    def __init__(self, source_id: str, deleted: list[str], remaining: list[str]) -> None:
        super().__init__(
            f"destroy of {source_id} stopped after {len(deleted)} deletions, "
            f"{len(remaining)} remaining"
        )
        self.source_id = source_id
        self.deleted = deleted
        self.remaining = remaining
