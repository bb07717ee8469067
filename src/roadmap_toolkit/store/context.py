"""
Module: store.context

Purpose:
    Explicit application context. Holds the current roadmap snapshot
    together with the collaborators needed to change and persist it.
    Every caller receives the context instead of reading shared state.

Key Classes:
    - AppContext: Current roadmap, repository, id generator and clock

Dependencies:
    - store.repository: Persistence
    - store.editing: Pure edit operations
    - core.utils.serialization: Import / export documents

Used By:
    - cli
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Optional

from roadmap_toolkit.core.models import Phase, Roadmap
from roadmap_toolkit.core.utils.clock import Clock, utc_now_iso
from roadmap_toolkit.core.utils.ids import IdGenerator, UuidIdGenerator
from roadmap_toolkit.core.utils.serialization import deserialize_roadmap, serialize_roadmap
from roadmap_toolkit.progress.aggregator import RoadmapSummary, summarize_roadmap

from .editing import default_roadmap
from .repository import RoadmapNotFound, RoadmapRepository

logger = logging.getLogger(__name__)


class AppContext:
    """
    Owner of the current roadmap snapshot.

    Attributes:
        repository: Where the roadmap is persisted
        ids: Source of new node ids
        clock: Source of timestamps
        roadmap: Current snapshot (None until load() is called)

    Example:
        >>> ctx = AppContext(InMemoryRepository())
        >>> ctx.load()
        >>> ctx.apply(add_phase, "Launch", ctx.ids)
        >>> ctx.active_phase().title
        'Launch'
    """

    def __init__(
        self,
        repository: RoadmapRepository,
        ids: Optional[IdGenerator] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.repository = repository
        self.ids = ids or UuidIdGenerator()
        self.clock = clock or utc_now_iso
        self.roadmap: Optional[Roadmap] = None

    @property
    def current(self) -> Roadmap:
        """Current snapshot, loading it on first access."""
        if self.roadmap is None:
            return self.load()
        return self.roadmap

    def load(self) -> Roadmap:
        """
        Load the stored roadmap, falling back to the default roadmap.

        The active phase reference is normalized so it always names an
        existing phase (or None for an empty roadmap).
        """
        try:
            roadmap = self.repository.load()
        except RoadmapNotFound as e:
            logger.info(f"Starting from default roadmap ({e.reason})")
            roadmap = default_roadmap(self.ids, self.clock)

        self.roadmap = _normalize_active(roadmap)
        return self.roadmap

    def save(self) -> Roadmap:
        """Stamp meta.updated_at and persist the current snapshot."""
        return self._commit(self.current)

    def _commit(self, roadmap: Roadmap) -> Roadmap:
        """Persist ``roadmap`` and make it current; a failed write changes nothing."""
        stamped = replace(roadmap, meta=replace(roadmap.meta, updated_at=self.clock()))
        self.repository.save(stamped)
        self.roadmap = stamped
        return stamped

    def apply(self, edit: Callable[..., Roadmap], *args: Any) -> Roadmap:
        """
        Run an edit operation on the current snapshot and save the result.

        Args:
            edit: Function taking (roadmap, *args) and returning a Roadmap
            *args: Remaining arguments for the edit

        Raises:
            ValueError, KeyError: From the edit; the snapshot is unchanged
            OSError: If the write fails; the snapshot is unchanged
        """
        updated = edit(self.current, *args)
        return self._commit(_normalize_active(updated))

    def reset(self) -> Roadmap:
        """Clear the store and start again from the default roadmap."""
        self.repository.clear()
        roadmap = self._commit(default_roadmap(self.ids, self.clock))
        logger.info("Roadmap reset to defaults")
        return roadmap

    def import_document(self, data: Any, *, strict: bool = False) -> Roadmap:
        """
        Replace the current roadmap with an imported document.

        Validation runs before anything changes, so a rejected document
        leaves the current snapshot and the store untouched.

        Raises:
            ValidationError: If the document is not a roadmap
        """
        imported = deserialize_roadmap(data, strict=strict)
        roadmap = self._commit(_normalize_active(imported))
        logger.info(f"Imported roadmap with {len(imported.phases)} phases")
        return roadmap

    def export_document(self) -> dict[str, Any]:
        return serialize_roadmap(self.current)

    def active_phase(self) -> Optional[Phase]:
        return self.current.resolve_active_phase()

    def summary(self) -> RoadmapSummary:
        """Aggregates for the current snapshot."""
        return summarize_roadmap(self.current)


def _normalize_active(roadmap: Roadmap) -> Roadmap:
    active = roadmap.resolve_active_phase()
    active_id = active.id if active is not None else None
    if active_id == roadmap.active_phase_id:
        return roadmap
    return replace(roadmap, active_phase_id=active_id)
