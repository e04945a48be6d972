"""Sample capabilities and targets shared by the test modules."""

from __future__ import annotations

import asyncio
import time
from abc import ABC, abstractmethod
from typing import List, Protocol, runtime_checkable


@runtime_checkable
class Stack(Protocol):
    name: str

    def push(self, item: int) -> None: ...

    def pop(self) -> int: ...

    def peek(self) -> int: ...

    def __len__(self) -> int: ...


class Resettable(ABC):
    @abstractmethod
    def reset(self) -> None:
        """Drop all state."""

    @property
    @abstractmethod
    def resets(self) -> int:
        """Number of resets so far."""


class Greeter(Protocol):
    def greet(self, name: str, *, punctuation: str = "!") -> str: ...

    def push(self, item: int) -> None: ...


class ListStack(Stack, Resettable):
    """Concrete stack declaring both capabilities in its bases."""

    def __init__(self, name: str = "stack") -> None:
        self.name = name
        self._items: List[int] = []
        self._resets = 0

    def push(self, item: int) -> None:
        self._items.append(item)

    def pop(self) -> int:
        return self._items.pop()

    def peek(self) -> int:
        return self._items[-1]

    def __len__(self) -> int:
        return len(self._items)

    def reset(self) -> None:
        self._items.clear()
        self._resets += 1

    @property
    def resets(self) -> int:
        return self._resets

    def describe(self) -> str:
        return f"{self.name}:{len(self._items)}"

    def _compact(self) -> None:
        self._items = list(self._items)


class SlowStack(ListStack):
    """Stack whose push sleeps for a configurable number of seconds."""

    def __init__(self, delay: float) -> None:
        super().__init__("slow")
        self.delay = delay

    def push(self, item: int) -> None:
        time.sleep(self.delay)
        super().push(item)


class FriendlyStack(ListStack):
    def greet(self, name: str, *, punctuation: str = "!") -> str:
        return f"hello {name}{punctuation}"


class Plain:
    """Target without any declared capability."""

    def ping(self) -> str:
        return "pong"


class JobFactory(ABC):
    """ABC mixing abstract instance, class, static and private hooks."""

    @classmethod
    @abstractmethod
    def create(cls) -> "JobFactory": ...

    @staticmethod
    @abstractmethod
    def version() -> str: ...

    @abstractmethod
    def _validate(self) -> bool: ...

    @abstractmethod
    def run(self) -> str: ...


class EchoJob(JobFactory):
    @classmethod
    def create(cls) -> "EchoJob":
        return cls()

    @staticmethod
    def version() -> str:
        return "1.0"

    def _validate(self) -> bool:
        return True

    def run(self) -> str:
        return "ran"


class Fetcher(Protocol):
    async def fetch(self, key: str) -> str: ...

    def cached(self) -> int: ...


class SleepyFetcher(Fetcher):
    """Fetcher whose coroutine sleeps before answering or failing."""

    def __init__(self, delay: float) -> None:
        self.delay = delay
        self.hits = 0

    async def fetch(self, key: str) -> str:
        await asyncio.sleep(self.delay)
        if key == "missing":
            raise KeyError(key)
        self.hits += 1
        return key.upper()

    def cached(self) -> int:
        return self.hits
