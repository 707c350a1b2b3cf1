from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Union

from othello.engine.board import MAX_BOARD_SIZE, Color, Coordinate, CoordinateParseError, parse_coordinate


class MessageError(ValueError):
    pass


@dataclass(frozen=True)
class BoardSnapshot:
    size: int
    board: str
    active: Color
    # How many of the receiving peer's moves the sender has processed
    acked: int = 0


@dataclass(frozen=True)
class TurnAnnouncement:
    active: Color
    host_color: Color


@dataclass(frozen=True)
class MoveSubmission:
    color: Color
    coord: Coordinate


Message = Union[BoardSnapshot, TurnAnnouncement, MoveSubmission]

JSONDict = Dict[str, Any]


def to_dict(message: Message) -> JSONDict:
    if isinstance(message, BoardSnapshot):
        return {
            "type": "board",
            "size": message.size,
            "board": message.board,
            "active": message.active.name,
            "acked": message.acked,
        }
    if isinstance(message, TurnAnnouncement):
        return {"type": "turn", "active": message.active.name, "host_color": message.host_color.name}
    if isinstance(message, MoveSubmission):
        return {"type": "move", "color": message.color.name, "coord": str(message.coord)}
    raise TypeError(f"Not a message: {message!r}")


def encode(message: Message) -> bytes:
    """One JSON object per line."""
    return (json.dumps(to_dict(message)) + "\n").encode("utf-8")


def decode(line: bytes | str) -> Message:
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MessageError("Message is not valid UTF-8") from exc
    try:
        data = json.loads(line)
    except json.JSONDecodeError as exc:
        raise MessageError(f"Bad data: {line.strip()!r}") from exc
    return from_dict(data)


def from_dict(data: Any) -> Message:
    if not isinstance(data, dict):
        raise MessageError("Message must be a JSON object")

    kind = data.get("type")
    if kind == "board":
        size = _field(data, "size", int)
        if not 1 <= size <= MAX_BOARD_SIZE:
            raise MessageError(f"Board size {size} out of range")
        board = _field(data, "board", str)
        if len(board) != size * size or set(board) - {"B", "W", "."}:
            raise MessageError("Board state does not match its size")
        active = _color(data, "active")
        acked = _field(data, "acked", int)
        if acked < 0:
            raise MessageError(f"Ack count {acked} out of range")
        return BoardSnapshot(size=size, board=board, active=active, acked=acked)
    if kind == "turn":
        return TurnAnnouncement(active=_color(data, "active"), host_color=_color(data, "host_color"))
    if kind == "move":
        coord_text = _field(data, "coord", str)
        try:
            coord = parse_coordinate(coord_text, MAX_BOARD_SIZE)
        except CoordinateParseError as exc:
            raise MessageError(f"Bad coordinate {coord_text!r}: {exc}") from exc
        return MoveSubmission(color=_color(data, "color"), coord=coord)
    raise MessageError(f"Unknown message type {kind!r}")


def _field(data: JSONDict, name: str, kind: type) -> Any:
    if name not in data:
        raise MessageError(f"Missing field '{name}'")
    value = data[name]
    # bool is an int subclass; reject it for numeric fields
    if not isinstance(value, kind) or isinstance(value, bool):
        raise MessageError(f"Field '{name}' must be {kind.__name__}")
    return value


def _color(data: JSONDict, name: str) -> Color:
    value = _field(data, name, str)
    try:
        return Color[value]
    except KeyError as exc:
        raise MessageError(f"Unknown color {value!r}") from exc
