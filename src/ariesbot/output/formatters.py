"""Rich/JSON output helpers for the operator CLI.

Human mode prints the reply text (failures prefixed with a styled
status line); ``--json`` dumps the full ServiceResult alongside it.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.text import Text

from ariesbot.output.console import create_console, get_output

if TYPE_CHECKING:
    from ariesbot.services.result import ServiceResult


def format_reply(result: ServiceResult, reply: str, *, json_output: bool = False) -> str:
    """Format one bot reply for the terminal."""
    if json_output:
        payload: dict[str, Any] = result.model_dump(mode="json")
        payload["reply"] = reply
        return _json.dumps(payload, indent=2)
    if result.ok:
        return reply

    console = create_console()
    console.print(
        Text("ERROR", style="aries.error"),
        Text(f"  {result.op}", style="aries.op"),
        Text(" — "),
        Text(reply),
        soft_wrap=True,
    )
    return get_output(console).rstrip("\n")


def format_result(result: ServiceResult, *, json_output: bool = False) -> str:
    """Format an operator-command result (init, upgrade, users)."""
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    if result.ok:
        console.print(Text("OK", style="aries.ok"), Text(f"  {result.op}", style="aries.op"))
        for key, value in result.data.items():
            if isinstance(value, (dict, list)):
                value = _json.dumps(value, separators=(",", ":"), default=str)
            console.print(Text(f"  {key}:", style="aries.key"), Text(str(value)), soft_wrap=True)
    else:
        msg = result.error.message if result.error else "Unknown error"
        console.print(
            Text("ERROR", style="aries.error"),
            Text(f"  {result.op}", style="aries.op"),
            Text(" — "),
            Text(msg),
            soft_wrap=True,
        )
    return get_output(console).rstrip("\n")
