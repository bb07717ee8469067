"""
Identifier generation for phases, steps and tasks.

Ids only need to be unique within their parent collection, but both
generators here are collision-resistant across the whole document so
that moving items between parents never creates duplicates.
"""

from __future__ import annotations

import itertools
import uuid
from abc import ABC, abstractmethod


class IdGenerator(ABC):
    """Source of new node identifiers."""

    @abstractmethod
    def new_id(self) -> str:
        """Return a fresh identifier."""


class UuidIdGenerator(IdGenerator):
    """Random ids from uuid4, truncated to ``length`` hex characters."""

    def __init__(self, length: int = 12) -> None:
        if not 8 <= length <= 32:
            raise ValueError(f"length must be between 8 and 32: {length}")
        self.length = length

    def new_id(self) -> str:
        return uuid.uuid4().hex[: self.length]


class CounterIdGenerator(IdGenerator):
    """
    Deterministic, monotonic ids such as ``id-1``, ``id-2``.

    Example:
        >>> ids = CounterIdGenerator("t")
        >>> ids.new_id(), ids.new_id()
        ('t-1', 't-2')
    """

    def __init__(self, prefix: str = "id", start: int = 1) -> None:
        self.prefix = prefix
        self._counter = itertools.count(start)

    def new_id(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"
