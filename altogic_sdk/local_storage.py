"""Local key/value storage used to persist the auth session and user."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ClientStorage(Protocol):
    """Storage collaborator for session persistence.

    Values are opaque strings. Implementations may be backed by anything
    (a file, a keyring, a browser-like store); the SDK only calls these
    three methods.
    """

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """In-process storage. Contents are lost when the process exits."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)
