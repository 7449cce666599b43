#!/usr/bin/env python3
"""
Bounded undo/redo history of project snapshots

Each history entry is an immutable, compressed copy of the serialised
project, never a reference to the live object graph.
"""

import json
import zlib
from dataclasses import dataclass
from typing import List

from .config import AppConfig
from .constants import DEFAULT_UNDO_STEPS, MAX_UNDO_STEPS
from .exceptions import UndoError, ValidationError
from .logging_config import get_logger
from .models.project import Project
from .serialisers.project_json import ProjectJsonSerialiser

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProjectSnapshot:
    """Compressed serialised project"""
    data: bytes

    @classmethod
    def capture(cls, project: Project) -> 'ProjectSnapshot':
        payload = ProjectJsonSerialiser.to_serialisable(project)
        return cls(zlib.compress(json.dumps(payload, separators=(',', ':')).encode('utf-8')))

    def to_serialisable(self) -> dict:
        return json.loads(zlib.decompress(self.data).decode('utf-8'))

    def restore(self) -> Project:
        """Build a new, independent project from the snapshot"""
        return ProjectJsonSerialiser.from_serialisable(self.to_serialisable())

    @property
    def size(self) -> int:
        return len(self.data)


class UndoManager:
    """
    Two bounded stacks of project snapshots.

    Pushing onto a full stack discards its single oldest entry. Adding a
    new undo state clears the redo stack.
    """

    def __init__(self, step_count: int = DEFAULT_UNDO_STEPS) -> None:
        """
        Args:
            step_count: Capacity of each stack, 0 to 100

        Raises:
            ValidationError: If step_count is outside 0-100
        """
        if isinstance(step_count, bool) or not isinstance(step_count, int) or \
                not 0 <= step_count <= MAX_UNDO_STEPS:
            raise ValidationError(f"Step count must be between 0 and {MAX_UNDO_STEPS}, got {step_count!r}")
        self._step_count = step_count
        self._undo_stack: List[ProjectSnapshot] = []
        self._redo_stack: List[ProjectSnapshot] = []

    @classmethod
    def from_config(cls, config: AppConfig) -> 'UndoManager':
        return cls(config.undo_step_count)

    @property
    def step_count(self) -> int:
        return self._step_count

    @property
    def undo_count(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_count(self) -> int:
        return len(self._redo_stack)

    @property
    def can_undo(self) -> bool:
        return len(self._undo_stack) > 0

    @property
    def can_redo(self) -> bool:
        return len(self._redo_stack) > 0

    def add_undo_state(self, project: Project) -> None:
        """Record the state to return to, discarding any redo history"""
        self._redo_stack.clear()
        self._push(self._undo_stack, ProjectSnapshot.capture(project))
        logger.debug(f"Undo state added ({len(self._undo_stack)}/{self._step_count})")

    def undo(self, current: Project) -> Project:
        """
        Step back one state.

        Args:
            current: The live project, recorded so the step can be redone

        Returns:
            The restored project

        Raises:
            UndoError: If there is nothing to undo
        """
        if not self._undo_stack:
            raise UndoError("There is nothing to undo")
        self._push(self._redo_stack, ProjectSnapshot.capture(current))
        return self._undo_stack.pop().restore()

    def redo(self, current: Project) -> Project:
        """
        Step forward one state.

        Raises:
            UndoError: If there is nothing to redo
        """
        if not self._redo_stack:
            raise UndoError("There is nothing to redo")
        self._push(self._undo_stack, ProjectSnapshot.capture(current))
        return self._redo_stack.pop().restore()

    def clear_undo(self) -> None:
        self._undo_stack.clear()

    def clear_redo(self) -> None:
        self._redo_stack.clear()

    def clear(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()

    def get_memory_usage(self) -> int:
        """Compressed bytes held by both stacks"""
        return sum(s.size for s in self._undo_stack) + sum(s.size for s in self._redo_stack)

    def _push(self, stack: List[ProjectSnapshot], snapshot: ProjectSnapshot) -> None:
        if self._step_count == 0:
            return
        if len(stack) >= self._step_count:
            stack.pop(0)
            logger.debug("Oldest history entry evicted")
        stack.append(snapshot)
