"""Workspace state for the niri compositor, built from its IPC workspace list."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from edgewidgets.workspace import WorkspaceCallback, WorkspaceContext, WorkspaceData
from edgewidgets.workspace_config import NiriConf

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class NiriWorkspace:
    """One workspace as reported by niri."""

    id: int
    idx: int
    output: str | None = None
    name: str | None = None
    is_active: bool = False
    is_focused: bool = False
    active_window_id: int | None = None


def workspace_from_json(data: Mapping[str, Any]) -> NiriWorkspace:
    """Build a workspace from niri's JSON object."""
    if not isinstance(data, Mapping):
        raise ValueError(f"workspace must be an object, got {data!r}")
    try:
        return NiriWorkspace(
            id=int(data["id"]),
            idx=int(data["idx"]),
            output=data.get("output"),
            name=data.get("name"),
            is_active=bool(data["is_active"]),
            is_focused=bool(data["is_focused"]),
            active_window_id=data.get("active_window_id"),
        )
    except KeyError as exc:
        raise ValueError(f"missing field `{exc.args[0]}`") from None


def filter_empty_workspaces(workspaces: Iterable[NiriWorkspace]) -> list[NiriWorkspace]:
    """Keep workspaces that are focused or hold a window."""
    return [w for w in workspaces if w.is_focused or w.active_window_id is not None]


def sort_niri_workspaces(
    workspaces: Iterable[NiriWorkspace],
) -> dict[str, list[NiriWorkspace]]:
    """Group workspaces by output, each group ordered by index; drop those without one."""
    grouped: dict[str, list[NiriWorkspace]] = {}
    for ws in workspaces:
        if ws.output is None:
            continue
        grouped.setdefault(ws.output, []).append(ws)
    for group in grouped.values():
        group.sort(key=lambda w: w.idx)
    return grouped


class NiriDataCache:
    """Workspaces per output, plus the output holding the focused workspace."""

    def __init__(self, inner: Mapping[str, list[NiriWorkspace]] | None = None) -> None:
        self.inner: dict[str, list[NiriWorkspace]] = dict(inner or {})
        self.focused_output: str | None = next(
            (name for name, wps in self.inner.items() if any(w.is_focused for w in wps)),
            None,
        )

    def is_default(self) -> bool:
        return not self.inner and self.focused_output is None

    def _visible(self, output: str, filter_empty: bool) -> list[NiriWorkspace] | None:
        wps = self.inner.get(output)
        if wps is None:
            return None
        return filter_empty_workspaces(wps) if filter_empty else list(wps)

    def get_workspace_data(self, output: str, filter_empty: bool) -> WorkspaceData:
        visible = self._visible(output, filter_empty)
        if visible is None:
            return WorkspaceData()
        focus = next((i for i, w in enumerate(visible) if w.is_focused), -1)
        active = next((i for i, w in enumerate(visible) if w.is_active), -1)
        return WorkspaceData(workspace_count=len(visible), focus=focus, active=active)

    def get_workspace(self, output: str, filter_empty: bool, index: int) -> NiriWorkspace | None:
        visible = self._visible(output, filter_empty)
        if visible is None or not 0 <= index < len(visible):
            return None
        return visible[index]


def _filter_empty(conf: Any) -> bool:
    return conf.filter_empty if isinstance(conf, NiriConf) else NiriConf().filter_empty


class NiriContext:
    """Distributes niri workspace state to registered widgets."""

    def __init__(self) -> None:
        self.workspace_ctx = WorkspaceContext()
        self.data = NiriDataCache()

    def update(self, workspaces: Iterable[NiriWorkspace]) -> None:
        """Replace the cached workspaces and notify callbacks.

        The first population is sent to every widget regardless of
        ``focused_only``; later ones respect it.
        """
        initial = self.data.is_default()
        self.data = NiriDataCache(sort_niri_workspaces(workspaces))
        if initial:
            self.workspace_ctx.sync_all_widgets_unconditionally(
                lambda output, conf: self.data.get_workspace_data(output, _filter_empty(conf))
            )
        self.call()

    def call(self) -> None:
        def data_for(output: str, conf: Any, focused_only: bool) -> WorkspaceData | None:
            if focused_only and self.data.focused_output != output:
                return None
            return self.data.get_workspace_data(output, _filter_empty(conf))

        self.workspace_ctx.call(data_for)

    def add_cb(self, cb: WorkspaceCallback) -> int:
        if not self.data.is_default():
            try:
                cb.sender(self.data.get_workspace_data(cb.output, _filter_empty(cb.data)))
            except Exception:
                log.exception("Error sending initial data in add_cb")
        return self.workspace_ctx.add_cb(cb)

    def remove_cb(self, cb_id: int) -> None:
        self.workspace_ctx.remove_cb(cb_id)

    def workspace_id_for_index(self, cb_id: int, index: int) -> int | None:
        """The niri id of the workspace shown at ``index`` by a widget."""
        cb = self.workspace_ctx.get(cb_id)
        if cb is None:
            return None
        ws = self.data.get_workspace(cb.output, _filter_empty(cb.data), index)
        return ws.id if ws is not None else None