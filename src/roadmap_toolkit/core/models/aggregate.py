"""
Module: aggregate

Purpose:
    Provides the Aggregate dataclass - the derived (status, pct) pair for a
    step or phase. Aggregates are never stored on the tree; they are always
    recalculated from the children.

Key Functions:
    - Aggregate.empty(): The (not_started, 0) value for empty collections

Dependencies:
    - dataclasses (std)
    - .status.Status

Used By:
    - progress.aggregator
    - export.renderer
    - cli
"""

from __future__ import annotations

from dataclasses import dataclass

from .status import Status


@dataclass(frozen=True, slots=True)
class Aggregate:
    """
    Rolled-up completion state.

    Attributes:
        status: One of the four Status values
        pct: Rounded completion percentage

    Invariants:
        - 0 <= pct <= 100
        - status is a Status member

    Example:
        >>> Aggregate(Status.IN_PROGRESS, 50).pct
        50
    """

    status: Status
    pct: int

    def __post_init__(self) -> None:
        """Validate aggregate on construction."""
        if not isinstance(self.status, Status):
            raise ValueError(f"Invalid aggregate status: {self.status!r}")
        if not isinstance(self.pct, int) or not 0 <= self.pct <= 100:
            raise ValueError(f"pct must be an integer in [0, 100]: {self.pct!r}")

    @classmethod
    def empty(cls) -> Aggregate:
        """Aggregate for a node with no children."""
        return cls(status=Status.NOT_STARTED, pct=0)

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"Aggregate({self.status.value}, {self.pct}%)"
