#!/usr/bin/env python3
"""
File based project storage

Each project is stored as <data_dir>/<project id>.json. A project entry
index (index.json) lists the stored projects, and ui_state.json holds the
persistent editor state.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional, Union

from .config import AppConfig, load_config
from .exceptions import FormatError, ProjectNotFoundError, StorageError, ValidationError
from .logging_config import get_logger
from .models.project import Project, ProjectEntryList
from .models.ui_state import PersistentUIState
from .serialisers.project_json import ProjectEntryListJsonSerialiser, ProjectJsonSerialiser
from .serialisers.ui_state_json import PersistentUIStateJsonSerialiser

logger = get_logger(__name__)

INDEX_FILE = "index.json"
UI_STATE_FILE = "ui_state.json"
_PROJECT_ID_PATTERN = re.compile(r'^[A-Za-z0-9_-]+$')


class ProjectStore:
    """Saves and loads projects below a data directory"""

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)

    @classmethod
    def from_config(cls, config: AppConfig) -> 'ProjectStore':
        return cls(config.data_dir)

    def project_path(self, project_id: str) -> Path:
        if not project_id or not _PROJECT_ID_PATTERN.match(project_id):
            raise ValidationError(f"Invalid project id: {project_id!r}")
        return self.data_dir / f"{project_id}.json"

    def save_project(self, project: Project) -> Path:
        """
        Write a project and refresh its entry in the index.

        The project's last modified time is updated before writing.

        Returns:
            Path of the written file
        """
        path = self.project_path(project.id)
        project.touch()
        self._write_text(path, ProjectJsonSerialiser.serialise(project, indent=True))

        entries = self.list_projects()
        entries.add_or_replace(project.to_entry())
        self._write_text(self.data_dir / INDEX_FILE, ProjectEntryListJsonSerialiser.serialise(entries))

        logger.info(f"Saved project {project.id} to {path}")
        return path

    def load_project(self, project_id: str) -> Project:
        """
        Raises:
            ProjectNotFoundError: If no project with that id is stored
            FormatError: If the stored file is not a valid project
        """
        path = self.project_path(project_id)
        if not path.exists():
            raise ProjectNotFoundError(f"Project {project_id} was not found")
        project = ProjectJsonSerialiser.deserialise(self._read_text(path))
        logger.debug(f"Loaded project {project_id} from {path}")
        return project

    def delete_project(self, project_id: str) -> None:
        path = self.project_path(project_id)
        if not path.exists():
            raise ProjectNotFoundError(f"Project {project_id} was not found")
        try:
            path.unlink()
        except OSError as e:
            raise StorageError(f"Could not delete {path}: {e}") from e

        entries = self.list_projects()
        if entries.get_by_id(project_id) is not None:
            entries.remove_by_id(project_id)
            self._write_text(self.data_dir / INDEX_FILE, ProjectEntryListJsonSerialiser.serialise(entries))
        logger.info(f"Deleted project {project_id}")

    def list_projects(self) -> ProjectEntryList:
        """Stored project entries, empty when the index is missing or unreadable"""
        path = self.data_dir / INDEX_FILE
        if not path.exists():
            return ProjectEntryList()
        try:
            return ProjectEntryListJsonSerialiser.deserialise(self._read_text(path))
        except (FormatError, ValidationError, StorageError) as e:
            logger.warning(f"Ignoring unreadable project index {path}: {e}")
            return ProjectEntryList()

    def save_ui_state(self, state: PersistentUIState) -> None:
        self._write_text(self.data_dir / UI_STATE_FILE, PersistentUIStateJsonSerialiser.serialise(state))

    def load_ui_state(self) -> PersistentUIState:
        """Stored UI state, defaults when missing or unreadable"""
        path = self.data_dir / UI_STATE_FILE
        if not path.exists():
            return PersistentUIState()
        try:
            return PersistentUIStateJsonSerialiser.deserialise(self._read_text(path))
        except (FormatError, StorageError) as e:
            logger.warning(f"Ignoring unreadable UI state {path}: {e}")
            return PersistentUIState()

    def _read_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not read {path}: {e}") from e

    def _write_text(self, path: Path, text: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(text)
                os.replace(temp_name, path)
            except OSError:
                os.unlink(temp_name)
                raise
        except OSError as e:
            raise StorageError(f"Could not write {path}: {e}") from e


def open_store(config: Optional[AppConfig] = None) -> ProjectStore:
    return ProjectStore.from_config(config or load_config())
