"""Task and grant-deadline calendar kept in local storage."""

import json
import logging
import time
import warnings
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from .config import DEFAULT_STORAGE_PATH, TASKS_KEY
from .errors import PersistenceWarning
from .models import TASK_KINDS, Task

logger = logging.getLogger(__name__)


class LocalStorage:
    """String key-value store backed by one JSON file."""

    def __init__(self, path: Optional[Path] = None):
        self.path = path or DEFAULT_STORAGE_PATH

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key (or file) is absent."""
        if not self.path.exists():
            return None
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Storage file is not a JSON object: {self.path}")
        return data.get(key)

    def set_item(self, key: str, value: str) -> None:
        data = {}
        if self.path.exists():
            try:
                data = json.loads(self.path.read_text(encoding="utf-8"))
            except ValueError:
                logger.warning(f"Overwriting unreadable storage file {self.path}")
            if not isinstance(data, dict):
                data = {}
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _due_key(task: Task) -> date:
    return date.fromisoformat(task.due_date[:10])


def _warn(message: str) -> None:
    logger.warning(message)
    warnings.warn(message, PersistenceWarning, stacklevel=3)


class TaskStore:
    """Calendar entries kept sorted by due date.

    The list is read once on creation and written back after every change.
    Storage problems never raise: unreadable data loads as an empty list and
    failed writes leave the in-memory list unsaved.
    """

    def __init__(self, storage: LocalStorage, key: str = TASKS_KEY,
                 clock: Callable[[], float] = time.time):
        self.storage = storage
        self.key = key
        self.clock = clock
        self.tasks: list = self._load()

    def add(self, title: str, due_date: str, kind: str = "task") -> Task:
        """Add an entry and persist the list.

        Raises:
            ValueError: if title or due date is missing or invalid
        """
        if not title or not title.strip():
            raise ValueError("Task title is required")
        if not due_date:
            raise ValueError("Task due date is required")
        date.fromisoformat(due_date[:10])
        if kind not in TASK_KINDS:
            raise ValueError(f"Task type must be one of: {', '.join(TASK_KINDS)}")

        task_id = int(self.clock() * 1000)
        existing = {t.id for t in self.tasks}
        while task_id in existing:
            task_id += 1

        task = Task(id=task_id, title=title, due_date=due_date, kind=kind)
        self.tasks = sorted(self.tasks + [task], key=_due_key)
        self._save()
        return task

    def remove(self, task_id: int) -> bool:
        """Delete an entry; returns False if no entry has that id."""
        remaining = [t for t in self.tasks if t.id != task_id]
        if len(remaining) == len(self.tasks):
            return False
        self.tasks = remaining
        self._save()
        return True

    def _load(self) -> list:
        try:
            raw = self.storage.get_item(self.key)
        except (OSError, ValueError) as e:
            _warn(f"Could not load tasks from local storage: {e}")
            return []

        if not raw:
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError("stored tasks are not a list")
            tasks = [Task.from_dict(item) for item in data]
            return sorted(tasks, key=_due_key)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            _warn(f"Could not load tasks from local storage: {e}")
            return []

    def _save(self) -> None:
        try:
            self.storage.set_item(self.key, json.dumps([t.to_dict() for t in self.tasks]))
        except (OSError, TypeError, ValueError) as e:
            _warn(f"Could not save tasks to local storage: {e}")
