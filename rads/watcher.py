"""Watching a project directory and reporting changes to its files."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

_IGNORED_COMPONENTS = frozenset(
    [".git", "target", "dist", "package", "node_modules", ".DS_Store"]
)


class ProjectFileEventKind(str, Enum):
    """What happened to the files of a project."""

    CREATE = "create"
    MODIFY = "modify"
    REMOVE = "remove"
    OTHER = "other"


@dataclass
class ProjectFileEvent:
    """A change to one or more files of a project, paths relative to its root."""

    project: Path
    paths: list[Path]
    kind: ProjectFileEventKind
    at_unix_ms: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "project": str(self.project),
            "paths": [str(path) for path in self.paths],
            "kind": self.kind.value,
            "at_unix_ms": self.at_unix_ms,
        }


def is_ignored_path(path: Path | str) -> bool:
    """True if any component of the path is a build, VCS or packaging directory."""
    return any(part in _IGNORED_COMPONENTS for part in Path(path).parts)


def _relative_to(path: Path, project: Path) -> Path:
    try:
        return path.relative_to(project)
    except ValueError:
        return path


def build_project_file_event(
    project: Path | str, kind: ProjectFileEventKind, paths: Iterable[Path | str]
) -> Optional[ProjectFileEvent]:
    """Event for the paths that are not ignored, or None when none are left."""
    project = Path(project)
    kept = [
        _relative_to(Path(path), project) for path in paths if not is_ignored_path(path)
    ]
    if not kept:
        return None
    return ProjectFileEvent(
        project=project,
        paths=kept,
        kind=ProjectFileEventKind(kind),
        at_unix_ms=int(time.time() * 1000),
    )


_EVENT_KINDS = {
    "created": ProjectFileEventKind.CREATE,
    "modified": ProjectFileEventKind.MODIFY,
    "moved": ProjectFileEventKind.MODIFY,
    "deleted": ProjectFileEventKind.REMOVE,
}


class _ProjectFileHandler(FileSystemEventHandler):
    def __init__(self, project: Path, on_event: Callable[[ProjectFileEvent], None]) -> None:
        super().__init__()
        self._project = project
        self._on_event = on_event

    def on_any_event(self, event: FileSystemEvent) -> None:
        kind = _EVENT_KINDS.get(event.event_type)
        if kind is None:
            return
        paths = [os.fsdecode(event.src_path)]
        dest = getattr(event, "dest_path", "")
        if dest:
            paths.append(os.fsdecode(dest))
        project_event = build_project_file_event(self._project, kind, paths)
        if project_event is not None:
            self._on_event(project_event)


def watch_project_files(
    project: Path | str, on_event: Callable[[ProjectFileEvent], None]
):
    """Watch the project recursively and call on_event for each relevant change.

    Returns the started observer; call stop() and join() on it to end watching.
    """
    project = Path(project)
    observer = Observer()
    observer.schedule(_ProjectFileHandler(project, on_event), str(project), recursive=True)
    observer.start()
    return observer