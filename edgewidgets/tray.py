"""Status-notifier tray items, their menus, and the map kept up to date by tray events."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

log = logging.getLogger(__name__)


class IconKind(Enum):
    NAMED = "named"
    PNG_DATA = "png-data"
    PIXMAP = "pixmap"


@dataclass(eq=False)
class Icon:
    """An icon given by theme name, PNG bytes or raw ARGB pixmaps.

    Two named icons are equal when their names are; icons carrying pixel
    data never compare equal, since comparing them would be costly.
    """

    kind: IconKind
    name: str = ""
    data: bytes = b""
    pixmaps: tuple[Any, ...] = ()

    @classmethod
    def named(cls, name: str) -> Icon:
        return cls(IconKind.NAMED, name=name)

    @classmethod
    def png_data(cls, data: bytes) -> Icon:
        return cls(IconKind.PNG_DATA, data=bytes(data))

    @classmethod
    def pixmap(cls, pixmaps: Iterable[Any]) -> Icon:
        return cls(IconKind.PIXMAP, pixmaps=tuple(pixmaps))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Icon):
            return NotImplemented
        if self.kind is IconKind.NAMED and other.kind is IconKind.NAMED:
            return self.name == other.name
        return False

    __hash__ = None  # type: ignore[assignment]


def _same_icon(a: Icon | None, b: Icon | None) -> bool:
    if a is None or b is None:
        return a is b
    return a == b


class MenuTypeKind(Enum):
    RADIO = "radio"
    CHECK = "check"
    SEPARATOR = "separator"
    NORMAL = "normal"


@dataclass
class MenuType:
    """Kind of a menu entry; ``checked`` matters for radio and check entries."""

    kind: MenuTypeKind = MenuTypeKind.NORMAL
    checked: bool = False

    @classmethod
    def radio(cls, checked: bool) -> MenuType:
        return cls(MenuTypeKind.RADIO, checked)

    @classmethod
    def check(cls, checked: bool) -> MenuType:
        return cls(MenuTypeKind.CHECK, checked)

    @classmethod
    def separator(cls) -> MenuType:
        return cls(MenuTypeKind.SEPARATOR)

    @classmethod
    def normal(cls) -> MenuType:
        return cls(MenuTypeKind.NORMAL)

    @property
    def is_toggle(self) -> bool:
        return self.kind in (MenuTypeKind.RADIO, MenuTypeKind.CHECK)


class ToggleState(Enum):
    ON = "on"
    OFF = "off"
    INDETERMINATE = "indeterminate"


def _toggle_state(value: object) -> ToggleState:
    return value if isinstance(value, ToggleState) else ToggleState(value)


def _toggle_on(state: ToggleState) -> bool:
    if state is ToggleState.INDETERMINATE:
        log.error("THIS SHOULD NOT HAPPEN. menu item has toggle but not toggle state")
        return False
    return state is ToggleState.ON


@dataclass
class MenuItem:
    """One entry of a tray menu, possibly holding a submenu."""

    id: int
    enabled: bool = True
    label: str | None = None
    icon: Icon | None = None
    menu_type: MenuType = field(default_factory=MenuType.normal)
    submenu: list[MenuItem] | None = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> MenuItem:
        """Build an entry from a menu layout object.

        Keys: ``id``, ``type`` ("standard" or "separator"), ``label``,
        ``enabled``, ``icon_name``, ``icon_data``, ``toggle_type``
        ("checkmark", "radio", "cannot-be-toggled"), ``toggle_state``,
        ``children_display`` and ``submenu``.
        """
        icon: Icon | None = None
        if raw.get("icon_data") is not None:
            icon = Icon.png_data(raw["icon_data"])
        elif raw.get("icon_name") is not None:
            icon = Icon.named(raw["icon_name"])

        entry_type = raw.get("type", "standard")
        if entry_type == "separator":
            menu_type = MenuType.separator()
        elif entry_type == "standard":
            toggle_type = raw.get("toggle_type", "cannot-be-toggled")
            state = _toggle_state(raw.get("toggle_state", ToggleState.INDETERMINATE))
            if toggle_type == "checkmark":
                menu_type = MenuType.check(_toggle_on(state))
            elif toggle_type == "radio":
                menu_type = MenuType.radio(_toggle_on(state))
            elif toggle_type == "cannot-be-toggled":
                menu_type = MenuType.normal()
            else:
                raise ValueError(f"unknown toggle type {toggle_type!r}")
        else:
            raise ValueError(f"unknown menu type {entry_type!r}")

        submenu = None
        if raw.get("children_display") == "submenu":
            submenu = [cls.from_raw(child) for child in raw.get("submenu", ())]

        return cls(
            id=int(raw["id"]),
            enabled=bool(raw.get("enabled", True)),
            label=raw.get("label"),
            icon=icon,
            menu_type=menu_type,
            submenu=submenu,
        )


@dataclass
class RootMenu:
    id: int
    submenus: list[MenuItem] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> RootMenu:
        return cls(
            id=int(raw.get("id", 0)),
            submenus=[MenuItem.from_raw(item) for item in raw.get("submenus", ())],
        )


@dataclass
class MenuDiff:
    """Changes to one menu entry.

    ``update`` maps property names (``label``, ``enabled``, ``icon_name``,
    ``icon_data``, ``toggle_state``) to new values; ``remove`` lists
    properties reset to their defaults.
    """

    id: int
    update: dict[str, Any] = field(default_factory=dict)
    remove: list[str] = field(default_factory=list)


def find_menu_by_id(items: Sequence[MenuItem], menu_id: int) -> MenuItem | None:
    """Depth-first search for the entry with ``menu_id``."""
    for item in items:
        if item.id == menu_id:
            return item
        if item.submenu is not None:
            found = find_menu_by_id(item.submenu, menu_id)
            if found is not None:
                return found
    return None


@dataclass
class Tray:
    """A tray item as shown in the tray widget."""

    id: str
    title: str | None = None
    icon: Icon | None = None
    icon_theme_path: str | None = None
    menu_path: str | None = None
    menu: RootMenu | None = None

    @classmethod
    def from_item(cls, item: Mapping[str, Any]) -> Tray:
        """Build from a status-notifier item object; the menu arrives later."""
        icon_name = item.get("icon_name")
        icon_pixmap = item.get("icon_pixmap")
        if icon_name:
            icon: Icon | None = Icon.named(icon_name)
        elif icon_pixmap is not None:
            icon = Icon.pixmap(icon_pixmap)
        else:
            icon = None
        return cls(
            id=item.get("id", ""),
            title=item.get("title"),
            icon=icon,
            icon_theme_path=item.get("icon_theme_path"),
            menu_path=item.get("menu"),
        )

    def update_title(self, title: str | None) -> bool:
        """Set the title; True when it changed."""
        if self.title == title:
            return False
        self.title = title
        return True

    def update_icon(self, icon: Icon | None) -> bool:
        """Set the icon; True unless it is known to be the same."""
        if _same_icon(self.icon, icon):
            return False
        self.icon = icon
        return True

    def update_menu(self, menu: RootMenu) -> None:
        self.menu = menu

    def update_menu_item(self, diff: MenuDiff) -> None:
        """Apply a diff to the matching entry, if the menu has one."""
        if self.menu is None:
            return
        item = find_menu_by_id(self.menu.submenus, diff.id)
        if item is None:
            return

        update = diff.update
        if "label" in update:
            item.label = update["label"]
        if "enabled" in update:
            item.enabled = bool(update["enabled"])
        if "icon_name" in update:
            name = update["icon_name"]
            item.icon = Icon.named(name) if name is not None else None
        if "icon_data" in update:
            data = update["icon_data"]
            item.icon = Icon.png_data(data) if data is not None else None
        if "toggle_state" in update:
            state = _toggle_state(update["toggle_state"])
            if state is ToggleState.INDETERMINATE:
                log.warning("Menu item with toggle state Indeterminate, this should not happen")
                item.menu_type = MenuType.normal()
            elif item.menu_type.is_toggle:
                item.menu_type.checked = state is ToggleState.ON
            else:
                log.error("Menu item with toggle state but not toggle type")

        for prop in diff.remove:
            if prop == "enabled":
                item.enabled = True


class UpdateKind(Enum):
    MENU = "menu"
    TITLE = "title"
    ICON = "icon"
    ATTENTION_ICON = "attention-icon"
    OVERLAY_ICON = "overlay-icon"
    STATUS = "status"
    TOOLTIP = "tooltip"
    MENU_DIFF = "menu-diff"
    MENU_CONNECT = "menu-connect"


class SignalKind(Enum):
    ADD = "add"
    RM = "rm"
    UPDATE = "update"


@dataclass
class TrayEvent:
    """An event from the tray host.

    For updates, ``payload`` depends on ``update_kind``: a root menu (or its
    raw object) for MENU, the new title for TITLE, an ``(icon_name,
    icon_pixmap)`` pair for ICON, and a list of ``MenuDiff`` for MENU_DIFF.
    """

    kind: SignalKind
    destination: str
    item: Mapping[str, Any] | None = None
    update_kind: UpdateKind | None = None
    payload: Any = None

    @classmethod
    def add(cls, destination: str, item: Mapping[str, Any]) -> TrayEvent:
        return cls(SignalKind.ADD, destination, item=item)

    @classmethod
    def remove(cls, destination: str) -> TrayEvent:
        return cls(SignalKind.RM, destination)

    @classmethod
    def update(cls, destination: str, update_kind: UpdateKind, payload: Any = None) -> TrayEvent:
        return cls(SignalKind.UPDATE, destination, update_kind=update_kind, payload=payload)


@dataclass(frozen=True)
class TrayEventSignal:
    """What the tray widget is told after the map changed."""

    kind: SignalKind
    destination: str


_IGNORED_UPDATES = {
    UpdateKind.ATTENTION_ICON: "NOT IMPLEMENTED ATTENTION ICON",
    UpdateKind.OVERLAY_ICON: "NOT IMPLEMENTED OVERLAY ICON",
    UpdateKind.STATUS: "NOT IMPLEMENTED STATUS",
    UpdateKind.TOOLTIP: "NOT IMPLEMENTED TOOLTIP",
    UpdateKind.MENU_CONNECT: "NOT IMPLEMENTED MENU CONNECT",
}


class TrayMap:
    """Tray items keyed by their bus destination."""

    def __init__(self) -> None:
        self._inner: dict[str, Tray] = {}

    def __len__(self) -> int:
        return len(self._inner)

    def __contains__(self, destination: object) -> bool:
        return destination in self._inner

    def list_tray(self) -> list[tuple[str, Tray]]:
        return list(self._inner.items())

    def get_tray(self, destination: str) -> Tray | None:
        return self._inner.get(destination)

    def handle_event(self, event: TrayEvent) -> TrayEventSignal | None:
        """Apply an event; return the signal to emit, or None if nothing visible changed."""
        dest = event.destination
        if event.kind is SignalKind.ADD:
            self._inner[dest] = Tray.from_item(event.item or {})
            return TrayEventSignal(SignalKind.ADD, dest)
        if event.kind is SignalKind.RM:
            self._inner.pop(dest, None)
            return TrayEventSignal(SignalKind.RM, dest)

        tray = self._inner.get(dest)
        kind = event.update_kind
        if kind is UpdateKind.MENU:
            if tray is not None:
                menu = event.payload
                if not isinstance(menu, RootMenu):
                    menu = RootMenu.from_raw(menu)
                tray.update_menu(menu)
            need_update = True
        elif kind is UpdateKind.TITLE:
            need_update = tray.update_title(event.payload) if tray is not None else False
        elif kind is UpdateKind.ICON:
            icon_name, icon_pixmap = event.payload or (None, None)
            if icon_name:
                icon: Icon | None = Icon.named(icon_name)
            elif icon_pixmap:
                icon = Icon.pixmap(icon_pixmap)
            else:
                icon = None
            need_update = tray.update_icon(icon) if tray is not None else False
        elif kind is UpdateKind.MENU_DIFF:
            if tray is not None:
                for diff in event.payload or ():
                    tray.update_menu_item(diff)
            need_update = True
        elif kind in _IGNORED_UPDATES:
            log.warning(_IGNORED_UPDATES[kind])
            need_update = False
        else:
            raise ValueError(f"update event without a known update kind: {kind!r}")

        return TrayEventSignal(SignalKind.UPDATE, dest) if need_update else None