"""
Module: store.repository

Purpose:
    Persistence capability for the roadmap tree. The application context
    receives a repository instead of reaching for a global store.

Key Classes:
    - RoadmapRepository: Abstract load/save/clear interface
    - JsonFileRepository: JSON document on disk with file locking
    - InMemoryRepository: Process-local repository
    - RoadmapNotFound: Nothing loadable is stored

Dependencies:
    - core.utils.serialization: Document (de)serialization
    - store.file_locking: portalocker-backed reads and atomic writes

Used By:
    - store.context: AppContext
    - cli
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from roadmap_toolkit.core.models import Roadmap
from roadmap_toolkit.core.schemas import ValidationError
from roadmap_toolkit.core.utils.serialization import deserialize_roadmap, dumps_roadmap

from .file_locking import locked_delete, locked_read_text, locked_write_text

logger = logging.getLogger(__name__)


class RoadmapNotFound(Exception):
    """No stored roadmap could be loaded."""

    def __init__(self, message: str, reason: str = "missing"):
        super().__init__(message)
        self.reason = reason


class RoadmapRepository(ABC):
    """
    Abstract persistence for a single roadmap document.
    """

    @abstractmethod
    def load(self) -> Roadmap:
        """
        Load the stored roadmap.

        Raises:
            RoadmapNotFound: If nothing is stored or the stored data is unusable
        """

    @abstractmethod
    def save(self, roadmap: Roadmap) -> None:
        """Persist ``roadmap``, replacing any stored document."""

    @abstractmethod
    def clear(self) -> None:
        """Remove the stored document."""


class JsonFileRepository(RoadmapRepository):
    """
    Roadmap stored as a JSON document on disk.

    Attributes:
        path: JSON file holding the document

    Example:
        >>> repo = JsonFileRepository(Path("workspace/roadmap.json"))
        >>> repo.save(roadmap)
        >>> repo.load() == roadmap
        True
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Roadmap:
        try:
            text = locked_read_text(self.path)
        except UnicodeDecodeError as e:
            logger.warning(f"Stored roadmap {self.path} is not UTF-8 text: {e}")
            raise RoadmapNotFound(f"Stored roadmap is corrupted: {e}", reason="corrupted") from e
        if text is None:
            raise RoadmapNotFound(f"No roadmap stored at {self.path}")

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Stored roadmap {self.path} is not valid JSON: {e}")
            raise RoadmapNotFound(f"Stored roadmap is corrupted: {e}", reason="corrupted") from e

        try:
            roadmap = deserialize_roadmap(data)
        except ValidationError as e:
            logger.warning(f"Stored roadmap {self.path} failed validation: {e}")
            raise RoadmapNotFound(f"Stored roadmap is invalid: {e}", reason="invalid") from e

        logger.info(f"Loaded roadmap with {len(roadmap.phases)} phases from {self.path}")
        return roadmap

    def save(self, roadmap: Roadmap) -> None:
        locked_write_text(self.path, dumps_roadmap(roadmap))
        logger.debug(f"Saved roadmap to {self.path}")

    def clear(self) -> None:
        if locked_delete(self.path):
            logger.info(f"Cleared stored roadmap {self.path}")


class InMemoryRepository(RoadmapRepository):
    """Repository holding the roadmap in memory."""

    def __init__(self, roadmap: Optional[Roadmap] = None) -> None:
        self._roadmap = roadmap
        self.save_count = 0

    def load(self) -> Roadmap:
        if self._roadmap is None:
            raise RoadmapNotFound("No roadmap stored in memory")
        return self._roadmap

    def save(self, roadmap: Roadmap) -> None:
        self._roadmap = roadmap
        self.save_count += 1

    def clear(self) -> None:
        self._roadmap = None
