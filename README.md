# edgewidgets

The data and state-tracking core of a screen-edge widget system for Linux
desktops: parsing and validation of widget configuration values, easing
animations, pointer state tracking, workspace state for Hyprland and niri,
a small Unix-socket command protocol, volume state bookkeeping, system-tray
item tracking and system readings (RAM, swap, CPU, battery, disk).

## Installation

```
pip install edgewidgets
```

For running the tests:

```
pip install "edgewidgets[test]"
pytest
```

## Modules

| Module | What it does |
| --- | --- |
| `edgewidgets.shared` | Shared config values: `Curve`, `Anchor`, `NumOrRelative`, `CommonSize`, `KeyEventMap`, `FontFamily` and the `parse_curve`, `parse_num_or_relative`, `parse_common_size`, `parse_key_event_map`, `parse_font_family` functions. Invalid input raises `ConfigError` (a `ValueError`). |
| `edgewidgets.common` | Settings common to every widget: edge, position, layer, margins, monitor selection, transition, pinning. `parse_common_config` builds a `CommonConfig`; `CommonConfig.resolve_relative` turns percentages into pixels. |
| `edgewidgets.workspace_config` | The workspace widget's `preset` setting (`hyprland` or `niri`, given as a string or as an object tagged by `type`). |
| `edgewidgets.animation` | `Animation`, `ToggleAnimation`, `ToggleDirection`, `AnimationList` and `calculate_transition`. |
| `edgewidgets.mouse_state` | `MouseState.handle_pointer` turns raw `PointerEvent`s into `MouseEvent`s, tracking hover and letting only one button be held at a time. |
| `edgewidgets.workspace` | `WorkspaceData` and `WorkspaceContext`, the callback registry shared by the compositor state caches. |
| `edgewidgets.niri` | `NiriWorkspace`, `NiriDataCache` and `NiriContext`: niri workspace state per output, with optional hiding of empty workspaces. |
| `edgewidgets.hypr` | `HyprWorkspace`, `HyprMonitor`, `HyprCacheData` and `HyprContext`: Hyprland workspace state per monitor. |
| `edgewidgets.ipc` | The JSON command protocol (`reload`, `q`, `togglepin`): `parse_command`, `send_command`, `serve_ipc`, `ipc_socket_path`. |
| `edgewidgets.pulseaudio` | `VolumeRegistry`: volume and mute state per sink/source, with default-device tracking and subscriber callbacks. |
| `edgewidgets.system` | RAM, swap, CPU, battery and disk readings through `psutil`. |
| `edgewidgets.tray` | `Tray`, `Icon`, `MenuItem`, `RootMenu`, `MenuDiff` and `TrayMap.handle_event`, which applies tray events and reports what changed. |
| `edgewidgets.icon_lookup` | `find_icon` finds `<name>.png` or `<name>.svg` directly inside an icon directory and caches the result; `clear_cache` empties the cache. |

## Examples

### Sizes given as numbers or percentages

```python
from edgewidgets.shared import parse_num_or_relative

margin = parse_num_or_relative("50%")
margin.is_relative()          # True
margin.calculate_relative(1080)
margin.get_num()              # 540.0
```

`get_num` raises `ValueError` while the value is still relative, and
`get_rel` raises it once the value is absolute.

### Common widget configuration

```python
from edgewidgets.common import parse_common_config

config = parse_common_config({
    "edge": "top",
    "layer": "overlay",
    "monitor": "*",
    "margins": {"left": "10%"},
})
config.resolve_relative((1920, 1080))
config.margins.left.get_num()  # 192.0
```

Keys are kebab-case (`transition-duration`, `pin-key`, ...); keys that are
not common settings are ignored. Unset fields take their defaults: a left
edge, a position equal to the edge, the top layer, monitor 0, a 300 ms
transition with an ease-cubic curve, pinning enabled with the middle button.

### Workspace presets

```python
from edgewidgets.workspace_config import parse_workspace_preset

str(parse_workspace_preset("niri"))
# 'Niri(filter_empty: true)'
str(parse_workspace_preset({"type": "niri", "filter-empty": False}))
# 'Niri(filter_empty: false)'
```

### Toggle animations

Animations read time from a clock function, `time.monotonic` by default;
any function returning seconds will do.

```python
from edgewidgets.animation import AnimationList, ToggleDirection
from edgewidgets.shared import Curve

now = [0.0]
animations = AnimationList(clock=lambda: now[0])
popup = animations.new_transition(300, Curve.EASE_CUBIC)   # milliseconds

now[0] = 1.0
popup.set_direction(ToggleDirection.FORWARD)
popup.progress()              # 0.0

now[0] = 1.15
animations.refresh()
popup.progress()              # 0.875, halfway along an ease-cubic curve
animations.has_in_progress()  # True
```

Reversing an animation that has not finished continues from its current
value rather than jumping.

### Workspace state

```python
from edgewidgets.niri import NiriContext, workspace_from_json
from edgewidgets.workspace import WorkspaceCallback
from edgewidgets.workspace_config import NiriConf

ctx = NiriContext()
ctx.add_cb(WorkspaceCallback(sender=print, output="DP-1", data=NiriConf()))
ctx.update([
    workspace_from_json({"id": 5, "idx": 1, "output": "DP-1",
                         "is_active": True, "is_focused": True}),
])
# prints WorkspaceData(workspace_count=1, focus=0, active=0)
```

`HyprContext.on_signal` does the same from Hyprland workspaces, monitors,
the focused workspace id and the focused monitor name.

### Sending an IPC command

```python
from edgewidgets.ipc import CommandBody, ipc_socket_path, send_command

path = ipc_socket_path(None, "/run/user/1000")   # /run/user/1000/edgewidgets.sock
send_command(CommandBody(command="togglepin", args=["my-widget"]), path)
```

Without a directory, `ipc_socket_path` uses `$XDG_RUNTIME_DIR`. A listener
started with `await serve_ipc(path, on_command)` replaces any stale socket
file, parses each message with `parse_command` and hands the resulting
`IPCCommand` to `on_command`; invalid messages are logged and dropped.
Failures raise `IPCError`.

### System readings

```python
from edgewidgets.system import get_cpu_info, get_disk_info, get_ram_info

ram = get_ram_info()
print(ram.used / ram.total)
print(get_cpu_info(None))     # usage since the previous call, as a fraction of 1
print(get_disk_info("/").used)
```

`get_battery_info` returns the charge fraction and a state (`unknown`,
`charging`, `discharging`, `empty` or `full`) and raises `RuntimeError`
when there is no battery; `get_disk_info` raises `ValueError` for a path
that is not a mount point.

## What this package does not do

It draws nothing and opens no windows or layer surfaces. It does not
connect to Hyprland, niri, PulseAudio or the D-Bus tray host by itself:
the state caches and registries are fed by your code. It does not load
configuration files, watch them for changes, or generate a JSON schema, and
it installs no command-line program.