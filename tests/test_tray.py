import pytest

from edgewidgets.tray import (
    Icon,
    MenuDiff,
    MenuItem,
    MenuType,
    MenuTypeKind,
    RootMenu,
    SignalKind,
    ToggleState,
    Tray,
    TrayEvent,
    TrayEventSignal,
    TrayMap,
    UpdateKind,
    find_menu_by_id,
)


def _menu_raw():
    return {
        "id": 0,
        "submenus": [
            {"id": 1, "label": "Open", "icon_name": "document-open"},
            {"id": 2, "type": "separator"},
            {
                "id": 3,
                "label": "Mode",
                "children_display": "submenu",
                "submenu": [
                    {"id": 4, "label": "A", "toggle_type": "radio", "toggle_state": "on"},
                    {"id": 5, "label": "B", "toggle_type": "radio", "toggle_state": "off"},
                ],
            },
            {"id": 6, "label": "Show", "toggle_type": "checkmark", "toggle_state": "off",
             "enabled": False},
        ],
    }


def _map_with_tray(dest="app.dest"):
    tray_map = TrayMap()
    tray_map.handle_event(TrayEvent.add(dest, {"id": "app", "title": "App", "icon_name": "app"}))
    return tray_map


def test_named_icons_compare_by_name():
    assert Icon.named("a") == Icon.named("a")
    assert not (Icon.named("a") == Icon.named("b"))


def test_data_icons_never_equal():
    assert not (Icon.png_data(b"x") == Icon.png_data(b"x"))
    assert not (Icon.pixmap([1]) == Icon.pixmap([1]))
    assert not (Icon.named("a") == Icon.png_data(b"a"))


def test_menu_item_from_raw_types():
    menu = RootMenu.from_raw(_menu_raw())
    kinds = [item.menu_type.kind for item in menu.submenus]
    assert kinds == [
        MenuTypeKind.NORMAL,
        MenuTypeKind.SEPARATOR,
        MenuTypeKind.NORMAL,
        MenuTypeKind.CHECK,
    ]
    assert menu.submenus[0].icon == Icon.named("document-open")
    assert menu.submenus[3].enabled is False
    assert menu.submenus[3].menu_type.checked is False


def test_submenu_only_when_children_display_is_submenu():
    item = MenuItem.from_raw({"id": 9, "submenu": [{"id": 10}]})
    assert item.submenu is None
    with_sub = MenuItem.from_raw(
        {"id": 9, "children_display": "submenu", "submenu": [{"id": 10}]}
    )
    assert [child.id for child in with_sub.submenu] == [10]


def test_icon_data_preferred_over_name():
    item = MenuItem.from_raw({"id": 1, "icon_name": "x", "icon_data": b"png"})
    assert item.icon.data == b"png"


def test_indeterminate_toggle_is_unchecked():
    item = MenuItem.from_raw({"id": 1, "toggle_type": "checkmark"})
    assert item.menu_type == MenuType.check(False)


def test_unknown_menu_type_raises():
    with pytest.raises(ValueError):
        MenuItem.from_raw({"id": 1, "type": "weird"})


def test_find_menu_by_id_nested():
    menu = RootMenu.from_raw(_menu_raw())
    found = find_menu_by_id(menu.submenus, 5)
    assert found.label == "B"
    assert find_menu_by_id(menu.submenus, 6).label == "Show"
    assert find_menu_by_id(menu.submenus, 42) is None


def test_tray_from_item_icon_choice():
    named = Tray.from_item({"id": "x", "icon_name": "n", "icon_pixmap": [1]})
    assert named.icon == Icon.named("n")
    pix = Tray.from_item({"id": "x", "icon_name": "", "icon_pixmap": []})
    assert pix.icon.pixmaps == ()
    none = Tray.from_item({"id": "x"})
    assert none.icon is None


def test_update_title():
    tray = Tray("t", title="a")
    assert tray.update_title("a") is False
    assert tray.update_title("b") is True
    assert tray.title == "b"
    assert tray.update_title(None) is True
    assert tray.title is None


def test_update_icon():
    tray = Tray("t", icon=Icon.named("a"))
    assert tray.update_icon(Icon.named("a")) is False
    assert tray.update_icon(Icon.named("b")) is True
    assert tray.update_icon(None) is True
    assert tray.update_icon(None) is False
    assert tray.icon is None


def test_update_menu_item_label_enabled_and_toggle():
    tray = Tray("t")
    tray.update_menu(RootMenu.from_raw(_menu_raw()))
    tray.update_menu_item(MenuDiff(4, {"toggle_state": ToggleState.OFF, "label": "AA"}))
    item = find_menu_by_id(tray.menu.submenus, 4)
    assert item.label == "AA"
    assert item.menu_type.checked is False

    tray.update_menu_item(MenuDiff(6, {"toggle_state": "on"}, ["enabled"]))
    show = find_menu_by_id(tray.menu.submenus, 6)
    assert show.menu_type == MenuType.check(True)
    assert show.enabled is True


def test_update_menu_item_indeterminate_becomes_normal():
    tray = Tray("t")
    tray.update_menu(RootMenu.from_raw(_menu_raw()))
    tray.update_menu_item(MenuDiff(4, {"toggle_state": ToggleState.INDETERMINATE}))
    assert find_menu_by_id(tray.menu.submenus, 4).menu_type == MenuType.normal()


def test_update_menu_item_icons():
    tray = Tray("t")
    tray.update_menu(RootMenu.from_raw(_menu_raw()))
    tray.update_menu_item(MenuDiff(1, {"icon_name": None}))
    assert find_menu_by_id(tray.menu.submenus, 1).icon is None
    tray.update_menu_item(MenuDiff(1, {"icon_name": "other"}))
    assert find_menu_by_id(tray.menu.submenus, 1).icon == Icon.named("other")


def test_update_menu_item_without_menu_is_noop():
    tray = Tray("t")
    tray.update_menu_item(MenuDiff(1, {"label": "x"}))
    assert tray.menu is None


def test_add_and_remove_events():
    tray_map = TrayMap()
    signal = tray_map.handle_event(TrayEvent.add("d1", {"id": "app", "title": "App"}))
    assert signal == TrayEventSignal(SignalKind.ADD, "d1")
    assert tray_map.get_tray("d1").title == "App"
    assert [dest for dest, _ in tray_map.list_tray()] == ["d1"]

    signal = tray_map.handle_event(TrayEvent.remove("d1"))
    assert signal == TrayEventSignal(SignalKind.RM, "d1")
    assert tray_map.get_tray("d1") is None
    assert len(tray_map) == 0


def test_title_update_signals_only_on_change():
    tray_map = _map_with_tray()
    assert tray_map.handle_event(TrayEvent.update("app.dest", UpdateKind.TITLE, "App")) is None
    signal = tray_map.handle_event(TrayEvent.update("app.dest", UpdateKind.TITLE, "New"))
    assert signal == TrayEventSignal(SignalKind.UPDATE, "app.dest")
    assert tray_map.get_tray("app.dest").title == "New"


def test_title_update_unknown_tray():
    tray_map = TrayMap()
    assert tray_map.handle_event(TrayEvent.update("nope", UpdateKind.TITLE, "x")) is None


def test_icon_update():
    tray_map = _map_with_tray()
    same = TrayEvent.update("app.dest", UpdateKind.ICON, ("app", None))
    assert tray_map.handle_event(same) is None
    changed = TrayEvent.update("app.dest", UpdateKind.ICON, ("", [1, 2]))
    assert tray_map.handle_event(changed).kind is SignalKind.UPDATE
    assert tray_map.get_tray("app.dest").icon.pixmaps == (1, 2)


def test_menu_and_menu_diff_updates():
    tray_map = _map_with_tray()
    signal = tray_map.handle_event(TrayEvent.update("app.dest", UpdateKind.MENU, _menu_raw()))
    assert signal.kind is SignalKind.UPDATE
    tray = tray_map.get_tray("app.dest")
    assert [item.id for item in tray.menu.submenus] == [1, 2, 3, 6]

    diff = TrayEvent.update("app.dest", UpdateKind.MENU_DIFF, [MenuDiff(1, {"label": "Go"})])
    assert tray_map.handle_event(diff).kind is SignalKind.UPDATE
    assert find_menu_by_id(tray.menu.submenus, 1).label == "Go"


def test_menu_update_for_missing_tray_still_signals():
    tray_map = TrayMap()
    signal = tray_map.handle_event(TrayEvent.update("gone", UpdateKind.MENU, {"id": 0}))
    assert signal == TrayEventSignal(SignalKind.UPDATE, "gone")


@pytest.mark.parametrize(
    "kind",
    [
        UpdateKind.ATTENTION_ICON,
        UpdateKind.OVERLAY_ICON,
        UpdateKind.STATUS,
        UpdateKind.TOOLTIP,
        UpdateKind.MENU_CONNECT,
    ],
)
def test_ignored_updates(kind):
    tray_map = _map_with_tray()
    assert tray_map.handle_event(TrayEvent.update("app.dest", kind, None)) is None