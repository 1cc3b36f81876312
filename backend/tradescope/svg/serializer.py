"""Write SVG markup from element dictionaries."""

from __future__ import annotations

from html import escape
from typing import Any


def _format_value(value: Any) -> str:
    if isinstance(value, float):
        return f"{round(value, 4):g}"
    return escape(str(value), quote=True)


def _element_lines(elem: dict[str, Any], indent: int) -> list[str]:
    pad = "  " * indent
    tag = elem.get("tag", "path")
    attrs = {k: v for k, v in elem.items() if k not in ("tag", "children") and v is not None}
    attr_str = " ".join(f'{k}="{_format_value(v)}"' for k, v in attrs.items())
    opening = f"{tag} {attr_str}" if attr_str else tag

    children = elem.get("children") or []
    if not children:
        return [f"{pad}<{opening} />"]

    lines = [f"{pad}<{opening}>"]
    for child in children:
        lines.extend(_element_lines(child, indent + 1))
    lines.append(f"{pad}</{tag}>")
    return lines


def serialize_svg(
    elements: list[dict[str, Any]],
    canvas_w: float = 100.0,
    canvas_h: float = 100.0,
    title: str = "",
    preserve_aspect_ratio: str | None = None,
) -> str:
    """Generate SVG markup. Elements may nest via a "children" list."""
    root = f'<svg viewBox="0 0 {canvas_w:g} {canvas_h:g}" xmlns="http://www.w3.org/2000/svg"'
    if preserve_aspect_ratio:
        root += f' preserveAspectRatio="{preserve_aspect_ratio}"'
    lines = [root + ' role="img">']

    if title:
        lines.append(f"  <title>{escape(title)}</title>")

    for elem in elements:
        lines.extend(_element_lines(elem, 1))

    lines.append("</svg>")
    return "\n".join(lines)
