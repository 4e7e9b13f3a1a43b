"""Tool implementations behind the tool registry.

Each call returns a tool result in the shape both servers forward as-is:
``{"content": [{"type": "text", "text": ...}], "isError": bool}``.
Failures are reported in the result, never raised, so a long-lived server keeps
accepting calls after a bad diagram.
"""
from __future__ import annotations

from typing import Any

from backends import render_excalidraw
from config import PROMPTS_DIR
from validators import check_elements

_READ_ME_PATH = PROMPTS_DIR / "excalidraw_read_me.md"


def text_result(text: str, *, is_error: bool = False) -> dict[str, Any]:
    return {"content": [{"type": "text", "text": text}], "isError": is_error}


# ── Dispatcher ────────────────────────────────────────────────────────────────

async def dispatch_tool(name: str, inputs: dict[str, Any]) -> dict[str, Any]:
    if name == "excalidraw_read_me":
        return read_me()
    if name == "create_excalidraw_diagram":
        return await create_diagram(
            inputs.get("elements"),
            output_path=inputs.get("outputPath"),
            fmt=inputs.get("format"),
        )
    return text_result(f"Unknown tool: {name}", is_error=True)


# ── Individual implementations ────────────────────────────────────────────────

def read_me() -> dict[str, Any]:
    return text_result(_READ_ME_PATH.read_text(encoding="utf-8"))


async def create_diagram(
    elements: Any,
    output_path: str | None = None,
    fmt: str | None = None,
) -> dict[str, Any]:
    report = check_elements(elements)
    if not report.valid:
        return text_result("\n".join(report.errors), is_error=True)

    output_format = (fmt or "png").lower()
    if output_format not in ("png", "svg"):
        return text_result(f"format must be 'png' or 'svg', got {fmt!r}.", is_error=True)

    result = await render_excalidraw(elements, output_path or None, output_format)
    if not result.success:
        return text_result(f"Render failed: {result.error}", is_error=True)

    text = f"Diagram saved to: {result.output_path}"
    if report.warnings:
        text += "\nWarnings:\n" + "\n".join(f"- {warning}" for warning in report.warnings)
    return text_result(text)
