"""Workspace state shared by compositor backends and the callbacks they feed."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkspaceData:
    """What a workspace widget needs to draw itself."""

    workspace_count: int = 1
    """Number of workspaces, at least 1."""
    focus: int = 0
    """Index of the focused workspace, or -1 when focus is elsewhere."""
    active: int = 0
    """Index of the active workspace on this output."""


@dataclass
class WorkspaceCallback:
    """A widget's subscription to workspace changes of one output."""

    sender: Callable[[WorkspaceData], Any]
    output: str
    data: Any = None
    focused_only: bool = False


class WorkspaceContext:
    """Registry of workspace callbacks keyed by an increasing id."""

    def __init__(self) -> None:
        self._next_id = 0
        self._callbacks: dict[int, WorkspaceCallback] = {}

    def __len__(self) -> int:
        return len(self._callbacks)

    def __contains__(self, cb_id: object) -> bool:
        return cb_id in self._callbacks

    def __iter__(self) -> Iterator[WorkspaceCallback]:
        return iter(list(self._callbacks.values()))

    def get(self, cb_id: int) -> WorkspaceCallback | None:
        return self._callbacks.get(cb_id)

    def add_cb(self, cb: WorkspaceCallback) -> int:
        cb_id = self._next_id
        self._callbacks[cb_id] = cb
        self._next_id += 1
        return cb_id

    def remove_cb(self, cb_id: int) -> None:
        self._callbacks.pop(cb_id, None)

    @staticmethod
    def _send(cb: WorkspaceCallback, data: WorkspaceData, what: str) -> None:
        try:
            cb.sender(data)
        except Exception:  # a closed receiver must not stop the others
            log.exception("%s", what)

    def call(
        self, data_func: Callable[[str, Any, bool], WorkspaceData | None]
    ) -> None:
        """Send data to every callback for which ``data_func`` yields some."""
        for cb in list(self._callbacks.values()):
            data = data_func(cb.output, cb.data, cb.focused_only)
            if data is None:
                continue
            if data.active < -1:
                raise ValueError(f"invalid active workspace index: {data.active}")
            if data.focus >= 0 and data.focus != data.active:
                raise ValueError(
                    f"focused workspace {data.focus} differs from active {data.active}"
                )
            self._send(cb, data, "Failed to send workspace data")

    def sync_all_widgets_unconditionally(
        self, data_func: Callable[[str, Any], WorkspaceData]
    ) -> None:
        """Send data to every callback, ignoring ``focused_only``."""
        for cb in list(self._callbacks.values()):
            self._send(cb, data_func(cb.output, cb.data), "Error sending unconditional sync data")