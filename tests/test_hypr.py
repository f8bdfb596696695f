import pytest

from edgewidgets.hypr import (
    HyprCacheData,
    HyprContext,
    HyprMonitor,
    HyprWorkspace,
    sort_hypr_workspaces,
    workspace_vec_to_data,
)
from edgewidgets.workspace import WorkspaceCallback, WorkspaceData


def test_sort_filters_special_and_orders_by_id():
    w3 = HyprWorkspace(3, "A")
    w1 = HyprWorkspace(1, "A")
    special = HyprWorkspace(-98, "A")
    b = HyprWorkspace(5, "B")
    result = sort_hypr_workspaces([w3, special, w1, b], [HyprMonitor("A", 3)])
    assert result["A"] == ([w1, w3], 3)
    assert result["B"] == ([b], -1)


def test_vec_to_data_worked_example():
    wps = [HyprWorkspace(1, "A"), HyprWorkspace(2, "A"), HyprWorkspace(3, "A")]
    assert workspace_vec_to_data(wps, 2, 2) == WorkspaceData(workspace_count=3, focus=1, active=1)


def test_vec_to_data_focus_elsewhere():
    wps = [HyprWorkspace(4, "A"), HyprWorkspace(6, "A")]
    data = workspace_vec_to_data(wps, 1, 6)
    assert data.focus == -1
    assert data.active == 6 - 4


def test_vec_to_data_empty_raises():
    with pytest.raises(ValueError):
        workspace_vec_to_data([], 1, 1)


def test_cache_default_and_unknown_output():
    cache = HyprCacheData()
    assert cache.is_default()
    assert cache.get_workspace_data("X") == WorkspaceData()
    cache.focus = 1
    assert not cache.is_default()


def _snapshot():
    workspaces = [HyprWorkspace(1, "A"), HyprWorkspace(2, "A"), HyprWorkspace(3, "B")]
    monitors = [HyprMonitor("A", 2, focused=True), HyprMonitor("B", 3)]
    return workspaces, monitors


def test_first_signal_syncs_all_then_respects_focused_only():
    ctx = HyprContext()
    got_a, got_b = [], []
    ctx.add_cb(WorkspaceCallback(got_a.append, "A", focused_only=True))
    ctx.add_cb(WorkspaceCallback(got_b.append, "B", focused_only=True))
    workspaces, monitors = _snapshot()

    ctx.on_signal(workspaces, monitors, 2, "A")
    assert len(got_b) == 1
    assert len(got_a) == 2
    assert got_a[-1] == ctx.data.get_workspace_data("A")

    ctx.on_signal(workspaces, monitors, 2, "A")
    assert len(got_b) == 1
    assert len(got_a) == 3


def test_monitor_focus_change_redirects_updates():
    ctx = HyprContext()
    workspaces, monitors = _snapshot()
    ctx.on_signal(workspaces, monitors, 2, "A")
    got_b = []
    ctx.add_cb(WorkspaceCallback(got_b.append, "B", focused_only=True))
    got_b.clear()
    ctx.on_monitor_focus_change("B")
    assert ctx.data.focused_monitor == "B"
    assert got_b == [ctx.data.get_workspace_data("B")]


def test_add_cb_gets_initial_data_only_when_populated():
    ctx = HyprContext()
    got = []
    ctx.add_cb(WorkspaceCallback(got.append, "A"))
    assert got == []
    workspaces, monitors = _snapshot()
    ctx.on_signal(workspaces, monitors, 2, "A")
    late = []
    ctx.add_cb(WorkspaceCallback(late.append, "A"))
    assert late == [ctx.data.get_workspace_data("A")]


def test_remove_cb_stops_updates():
    ctx = HyprContext()
    got = []
    cb_id = ctx.add_cb(WorkspaceCallback(got.append, "A"))
    ctx.remove_cb(cb_id)
    workspaces, monitors = _snapshot()
    ctx.on_signal(workspaces, monitors, 2, "A")
    assert got == []


def test_workspace_id_for_index():
    ctx = HyprContext()
    cb_id = ctx.add_cb(WorkspaceCallback(lambda _d: None, "A"))
    assert ctx.workspace_id_for_index(cb_id, 0) is None
    ctx.on_signal([HyprWorkspace(3, "A"), HyprWorkspace(4, "A")], [HyprMonitor("A", 3)], 3, "A")
    assert ctx.workspace_id_for_index(cb_id, 1) == 4
    assert ctx.workspace_id_for_index(cb_id + 1, 0) is None