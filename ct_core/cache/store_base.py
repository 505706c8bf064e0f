from __future__ import annotations

from abc import ABC, abstractmethod


class ContentStore(ABC):
    """Per-item metadata and global options storage owned by the host."""

    @abstractmethod
    def get_item_meta(self, item_id: int, key: str) -> str | None:
        ...

    @abstractmethod
    def set_item_meta(self, item_id: int, key: str, value: str) -> None:
        ...

    @abstractmethod
    def delete_item_meta_by_prefix(self, item_id: int, prefix: str) -> int:
        """Delete every meta key of ``item_id`` starting with ``prefix``; return the count."""

    @abstractmethod
    def get_option(self, key: str) -> str | None:
        ...

    @abstractmethod
    def set_option(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def delete_options_by_prefix(self, prefix: str) -> int:
        ...
