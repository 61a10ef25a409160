from abc import ABC, abstractmethod


class KeyValueStorePort(ABC):
    """String key-value storage. A single set() replaces the whole value."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        raise NotImplementedError

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, key: str) -> None:
        raise NotImplementedError
