"""Workspace state for the Hyprland compositor."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from edgewidgets.workspace import WorkspaceCallback, WorkspaceContext, WorkspaceData

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class HyprWorkspace:
    """A workspace and the monitor it is on."""

    id: int
    monitor: str
    name: str = ""


@dataclass(frozen=True)
class HyprMonitor:
    """A monitor and its active workspace."""

    name: str
    active_workspace_id: int
    focused: bool = False


WorkspaceMap = dict[str, tuple[list[HyprWorkspace], int]]


def sort_hypr_workspaces(
    workspaces: Iterable[HyprWorkspace], monitors: Sequence[HyprMonitor]
) -> WorkspaceMap:
    """Group regular workspaces (id > 0) by monitor, sorted by id, with the active id."""
    grouped: dict[str, list[HyprWorkspace]] = {}
    for ws in workspaces:
        grouped.setdefault(ws.monitor, []).append(ws)

    result: WorkspaceMap = {}
    for name, wps in grouped.items():
        regular = sorted((w for w in wps if w.id > 0), key=lambda w: w.id)
        active = next((m.active_workspace_id for m in monitors if m.name == name), -1)
        result[name] = (regular, active)
    return result


def workspace_vec_to_data(
    workspaces: Sequence[HyprWorkspace], focus_id: int, active: int
) -> WorkspaceData:
    """Turn sorted workspace ids into indices relative to the lowest id."""
    if not workspaces:
        raise ValueError("no regular workspaces on this monitor")
    min_id = workspaces[0].id
    max_id = workspaces[-1].id
    active_index = active - min_id
    focus = -1 if focus_id < min_id or focus_id > max_id else active_index
    return WorkspaceData(
        workspace_count=max_id - min_id + 1, focus=focus, active=active_index
    )


@dataclass
class HyprCacheData:
    """Latest workspace layout, focused workspace id and focused monitor."""

    map: WorkspaceMap = field(default_factory=dict)
    focus: int = -1
    focused_monitor: str | None = None

    def is_default(self) -> bool:
        return not self.map and self.focus == -1 and self.focused_monitor is None

    def get_workspace_data(self, output: str) -> WorkspaceData:
        entry = self.map.get(output)
        if entry is None:
            return WorkspaceData()
        wps, active = entry
        return workspace_vec_to_data(wps, self.focus, active)


class HyprContext:
    """Distributes Hyprland workspace state to registered widgets."""

    def __init__(self) -> None:
        self.workspace_ctx = WorkspaceContext()
        self.data = HyprCacheData()

    def on_signal(
        self,
        workspaces: Iterable[HyprWorkspace],
        monitors: Sequence[HyprMonitor],
        focus: int,
        focused_monitor: str | None,
    ) -> None:
        """Store a fresh snapshot and notify callbacks.

        The first snapshot goes to every widget regardless of ``focused_only``.
        """
        initial = self.data.is_default()
        self.data.map = sort_hypr_workspaces(workspaces, monitors)
        self.data.focus = focus
        self.data.focused_monitor = focused_monitor
        if initial:
            self.workspace_ctx.sync_all_widgets_unconditionally(
                lambda output, _conf: self.data.get_workspace_data(output)
            )
        self.call()

    def on_monitor_focus_change(self, monitor_name: str) -> None:
        self.data.focused_monitor = monitor_name
        log.debug("Monitor focus changed to: %s", monitor_name)
        self.call()

    def call(self) -> None:
        def data_for(output: str, _conf: object, focused_only: bool) -> WorkspaceData | None:
            if focused_only and self.data.focused_monitor != output:
                return None
            return self.data.get_workspace_data(output)

        self.workspace_ctx.call(data_for)

    def add_cb(self, cb: WorkspaceCallback) -> int:
        if not self.data.is_default():
            try:
                cb.sender(self.data.get_workspace_data(cb.output))
            except Exception:
                log.exception("Error sending initial data in add_cb")
        return self.workspace_ctx.add_cb(cb)

    def remove_cb(self, cb_id: int) -> None:
        self.workspace_ctx.remove_cb(cb_id)

    def workspace_id_for_index(self, cb_id: int, index: int) -> int | None:
        """The Hyprland workspace id a widget's ``index`` refers to."""
        cb = self.workspace_ctx.get(cb_id)
        if cb is None:
            return None
        entry = self.data.map.get(cb.output)
        if entry is None or not entry[0]:
            return None
        return entry[0][0].id + index