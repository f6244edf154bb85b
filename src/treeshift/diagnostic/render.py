# topmark:header:start
#
#   project      : TreeShift
#   file         : render.py
#   file_relpath : src/treeshift/diagnostic/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render messages for humans and machines.

Human output is one line per message, colored by kind with `yachalk`
(warnings yellow, errors bright red, everything else blue), preceded by a
triage summary such as ``"2 warnings, 1 dependency"``. Machine output is a
JSON document built from the payload schemas in
[`treeshift.diagnostic.machine.schemas`][treeshift.diagnostic.machine.schemas].
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from yachalk import chalk

from treeshift.diagnostic.machine.schemas import MachineMessageCounts, MachineMessageEntry
from treeshift.diagnostic.model import WARNING, PluginWarning

if TYPE_CHECKING:
    from collections.abc import Callable

    from treeshift.diagnostic.model import Message
    from treeshift.diagnostic.types import MessagesLike


def kind_color(kind: str) -> Callable[[str], str]:
    """Return the `yachalk` color function used for messages of ``kind``."""
    if kind == WARNING:
        return chalk.yellow
    if kind == "error":
        return chalk.red_bright
    return chalk.blue


def render_message_line(message: Message, *, color: bool = True) -> str:
    """Render one message as a single human-readable line.

    Warnings use their own string form (``[file:]line:column: text (plugin)``);
    other kinds render as ``kind: key=value, ... (plugin)``.
    """
    if isinstance(message, PluginWarning):
        body: str = str(message)
    else:
        fields: str = ", ".join(f"{k}={v!r}" for k, v in message.extra.items())
        body = f"{message.kind}: {fields}" if fields else message.kind
        if message.plugin:
            body += f" ({message.plugin})"
    return kind_color(message.kind)(body) if color else body


def render_summary(messages: MessagesLike) -> str:
    """Return a compact triage line such as ``"2 warnings, 1 dependency"``."""
    parts: list[str] = []
    for kind, n in messages.stats().counts.items():
        if n == 1:
            parts.append(f"{n} {kind}")
        elif kind.endswith("y"):
            parts.append(f"{n} {kind[:-1]}ies")
        else:
            parts.append(f"{n} {kind}s")
    return ", ".join(parts) if parts else "no messages"


def render_messages(messages: MessagesLike, *, color: bool = True) -> list[str]:
    """Render a summary line followed by one line per message."""
    lines: list[str] = [render_summary(messages)]
    lines.extend(f"- {render_message_line(m, color=color)}" for m in messages)
    return lines


def messages_to_json(messages: MessagesLike, *, indent: int | None = 2) -> str:
    """Serialize messages and their per-kind counts as a JSON document."""
    payload: dict[str, object] = {
        "messages": [MachineMessageEntry.from_message(m).to_dict() for m in messages],
        "summary": MachineMessageCounts.from_iterable(messages).to_dict(),
    }
    return json.dumps(payload, indent=indent)
