"""Messages passed over a runtime's console socket."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


def _encode(data: dict[str, Any]) -> str:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


@dataclass
class TerminalRequest:
    """A message passing the pseudoterminal master of a container."""

    type: str = ""
    container: str = ""

    def to_json(self) -> str:
        """Encode the message as compact JSON."""
        return _encode({"type": self.type, "container": self.container})


@dataclass
class Response:
    """A response message, optionally with a describing phrase."""

    type: str = ""
    message: str = ""

    def to_json(self) -> str:
        """Encode the message as compact JSON; an empty message is left out."""
        data = {"type": self.type}
        if self.message:
            data["message"] = self.message
        return _encode(data)


def _string_field(data: dict[str, Any], key: str) -> str:
    value = data.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string, not {type(value).__name__}")
    return value


def decode_message(text: str | bytes) -> TerminalRequest | Response:
    """Decode a console socket message.

    A message carrying a ``container`` field is a :class:`TerminalRequest`,
    any other a :class:`Response`. Unknown fields are ignored.
    Raises :class:`ValueError` for malformed JSON or fields of the wrong type.
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("console socket message must be a JSON object")
    msg_type = _string_field(data, "type")
    if "container" in data:
        return TerminalRequest(type=msg_type, container=_string_field(data, "container"))
    return Response(type=msg_type, message=_string_field(data, "message"))