"""Document capability shared by stored record kinds."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Doc(Protocol):
    """Anything stored in the document store: identity, revision, doctype."""

    @property
    def id(self) -> str | None: ...

    @property
    def rev(self) -> str | None: ...

    @property
    def doctype(self) -> str: ...
