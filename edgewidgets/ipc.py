"""Control socket: a client sends one JSON command per connection."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
import socket
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)

IPC_COMMAND_RELOAD = "reload"
IPC_COMMAND_QUIT = "q"
IPC_COMMAND_TOGGLE_PIN = "togglepin"

SOCKET_PREFIX = "edgewidgets"


class IPCError(Exception):
    """Raised when a command cannot be parsed, sent or located."""


@dataclass
class CommandBody:
    """The JSON message exchanged over the socket."""

    command: str = ""
    args: list[str] = field(default_factory=list)

    def to_json(self) -> str:
        return json.dumps(
            {"command": self.command, "args": list(self.args)}, separators=(",", ":")
        )


class IPCCommandKind(Enum):
    TOGGLE_PIN = "togglepin"
    RELOAD = "reload"
    EXIT = "exit"


@dataclass(frozen=True)
class IPCCommand:
    """A validated command; ``widget`` is set for pin toggling."""

    kind: IPCCommandKind
    widget: str | None = None


def _body_from_json(raw: str | bytes) -> CommandBody:
    if isinstance(raw, (bytes, bytearray)):
        raw = bytes(raw).decode("utf-8", errors="replace")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise IPCError(str(exc)) from None
    if not isinstance(data, dict):
        raise IPCError(f"command must be a JSON object, got {data!r}")
    command = data.get("command", "")
    args = data.get("args", [])
    if not isinstance(command, str):
        raise IPCError(f"command must be a string, got {command!r}")
    if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
        raise IPCError(f"args must be a list of strings, got {args!r}")
    return CommandBody(command, args)


def parse_command(raw: str | bytes) -> IPCCommand:
    """Parse a raw socket message into a command."""
    body = _body_from_json(raw)
    if body.command == IPC_COMMAND_TOGGLE_PIN:
        if not body.args:
            raise IPCError("No widget name")
        return IPCCommand(IPCCommandKind.TOGGLE_PIN, body.args[0])
    if body.command == IPC_COMMAND_QUIT:
        return IPCCommand(IPCCommandKind.EXIT)
    if body.command == IPC_COMMAND_RELOAD:
        return IPCCommand(IPCCommandKind.RELOAD)
    raise IPCError("unknown command")


def ipc_socket_path(
    namespace: str | None = None, runtime_dir: str | os.PathLike[str] | None = None
) -> Path:
    """Socket path inside the runtime directory, optionally namespaced."""
    if runtime_dir is None:
        runtime_dir = os.environ.get("XDG_RUNTIME_DIR")
        if not runtime_dir:
            raise IPCError("XDG_RUNTIME_DIR is not set")
    return Path(runtime_dir) / f"{SOCKET_PREFIX}{namespace or ''}.sock"


def send_command(body: CommandBody, path: str | os.PathLike[str]) -> None:
    """Connect to the socket and write one command."""
    data = body.to_json().encode("utf-8")
    try:
        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
            sock.connect(os.fspath(path))
            sock.sendall(data)
    except OSError as exc:
        raise IPCError(f"failed to send command: {exc}") from exc


async def serve_ipc(
    path: str | os.PathLike[str], on_command: Callable[[IPCCommand], Any]
) -> asyncio.AbstractServer:
    """Listen on ``path`` and hand every valid command to ``on_command``.

    A stale socket file is replaced. Invalid messages are logged and dropped.
    """
    sock_path = Path(path)
    sock_path.parent.mkdir(parents=True, exist_ok=True)
    with contextlib.suppress(FileNotFoundError):
        sock_path.unlink()

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        try:
            raw = (await reader.read()).decode("utf-8", errors="replace")
            log.debug("recv ipc msg: %s", raw)
            try:
                command = parse_command(raw)
            except IPCError as exc:
                log.error("invalid ipc message: %s", exc)
                return
            log.info("Receive ipc message: %s", command)
            on_command(command)
        except Exception:
            log.exception("Can not handle ipc connection")
        finally:
            writer.close()

    return await asyncio.start_unix_server(handle, path=os.fspath(sock_path))