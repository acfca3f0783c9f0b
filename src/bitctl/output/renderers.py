"""Operation-specific Rich renderers for ServiceResult.

Renderers write to a StringIO-backed Rich Console; the caller gets the
text back from :func:`render_result`. Dispatch is on ``result.op`` and
unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from bitctl.output.console import create_console, get_output, style_for_field

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from bitctl.services.result import ServiceResult

    Renderer = Callable[..., None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    verbose: bool = False,
    group_bits: bool = True,
) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose, group_bits=group_bits)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: only the primary value."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    data = result.data
    match result.op:
        case "encode":
            return str(data.get("bits", ""))
        case "decode" | "decode_hex":
            return str(data.get("decimal", ""))
        case "list_layouts":
            return "\n".join(str(item["name"]) for item in data.get("items", []))
        case "describe_layout":
            return str(data.get("example", ""))
        case "session":
            error = data.get("error")
            if error:
                return f"ERROR: {error['message']}"
            return f"{data.get('decimal', '')} {data.get('bits', '')}".strip()
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="bit.ok")
    op = Text(f"  {result.op}", style="bit.op")
    console.print(label, op, sep="")


def _field(console: Console, key: str, value: Any, style: str = "") -> None:
    """Print one indented ``key: value`` line."""
    line = Text(f"  {key}: ", style="bit.key")
    line.append(value if isinstance(value, Text) else Text(str(value), style=style))
    console.print(line)


def styled_bits(bits_display: str, *, is_float: bool) -> Text:
    """Color IEEE-754 sign/exponent/mantissa groups; integers stay plain."""
    if not is_float:
        return Text(bits_display)
    text = Text()
    names = ("sign", "exponent", "mantissa")
    for index, segment in enumerate(bits_display.split(" ")):
        if index:
            text.append(" ")
        text.append(segment, style=style_for_field(names[min(index, 2)]))
    return text


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block, including the telemetry span tree."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_span(console, value, indent=4)
        else:
            console.print(f"    {key}: {value}")


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    prefix = " " * indent
    duration = span.get("duration_ms", 0.0)
    line = Text(f"{prefix}{duration:>8.3f}ms  ", style="dim")
    line.append(str(span.get("name", "?")))
    annotations = span.get("annotations")
    if annotations:
        extras = ", ".join(f"{k}={v}" for k, v in annotations.items())
        line.append(f"  ({extras})", style="dim")
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    line = Text("ERROR", style="bit.error")
    line.append(f"  {result.op}", style="bit.op")
    line.append(f": {msg}")
    console.print(line)

    if verbose and err:
        console.print(Text(f"  code: {err.code}", style="dim"))
        for key, value in err.detail.items():
            console.print(Text(f"  {key}: {value}", style="dim"))


# ── Conversion renderers ──────────────────────────────────────────────


def _render_conversion(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    group_bits: bool = True,
) -> None:
    """Render encode / decode / decode_hex results."""
    d = result.data
    is_float = "precision" in d
    _status_line(console, result)
    _field(console, "layout", d.get("layout", ""))
    if "input" in d:
        _field(console, "input", d["input"])
    _field(console, "decimal", d.get("decimal", ""), style="bit.decimal")
    if group_bits:
        _field(console, "binary", styled_bits(d.get("bits_display", ""), is_float=is_float))
    else:
        _field(console, "binary", d.get("bits", ""))
    _field(console, "hex", d.get("hex_display", ""), style="bit.hex")
    if verbose:
        if group_bits:
            _field(console, "raw", d.get("bits", ""))
        if is_float:
            _field(console, "precision", d["precision"])
        _render_meta(console, result)


def _render_session(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    group_bits: bool = True,
) -> None:
    """Render the interactive session's three linked fields."""
    d = result.data
    is_float = "precision" in d
    header = Text(str(d.get("layout", "")), style="bit.op")
    if is_float:
        header.append(f"  precision={d['precision']}", style="dim")
    header.append(f"  [{d.get('state', '')}]", style="bit.state")
    console.print(header)

    error = d.get("error") or {}
    error_field = {
        "editing-decimal": "decimal",
        "editing-bits": "binary",
        "editing-hex": "hex",
    }.get(str(error.get("field", "")))
    rows: list[tuple[str, Any, str]] = [
        ("decimal", d.get("decimal", ""), "bit.decimal"),
        ("binary", styled_bits(d.get("bits_display", ""), is_float=is_float), ""),
        ("hex", d.get("hex_display", ""), "bit.hex"),
    ]
    for name, value, style in rows:
        _field(console, name, value, style=style)
        if name == error_field:
            console.print(Text(f"    ! {error['message']}", style="bit.error"))


# ── Layout renderers ──────────────────────────────────────────────────


def _render_layout_table(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    group_bits: bool = True,
) -> None:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Layout", style="bit.op", no_wrap=True)
    table.add_column("Bits", justify="right")
    table.add_column("Kind")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    if verbose:
        table.add_column("Description", style="dim")

    for item in result.data.get("items", []):
        if item.get("float"):
            kind = "float"
            lo, hi = f"{item['min']:.6g}", f"{item['max']:.6g}"
        else:
            kind = "signed" if item.get("signed") else "unsigned"
            lo, hi = str(item["min"]), str(item["max"])
        row = [str(item["name"]), str(item["bits"]), kind, lo, hi]
        if verbose:
            row.append(str(item.get("description", "")))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', 0)} layouts")


def _render_layout_detail(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    group_bits: bool = True,
) -> None:
    d = result.data
    is_float = bool(d.get("float"))
    _status_line(console, result)
    _field(console, "layout", d.get("name", ""))
    _field(console, "description", d.get("description", ""))
    _field(console, "bits", d.get("bits", ""))
    if is_float:
        _field(console, "exponent_bits", d.get("exponent_bits", ""))
        _field(console, "mantissa_bits", d.get("mantissa_bits", ""))
        _field(console, "max", f"{d.get('max', 0):.17g}")
        _field(console, "precision", f"{d.get('default_precision')} (max {d.get('max_precision')})")
    else:
        _field(console, "range", f"{d.get('min')} to {d.get('max')}")
    _field(console, "example", styled_bits(d.get("example_display", ""), is_float=is_float))
    _field(console, "example_hex", d.get("example_hex", ""), style="bit.hex")
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(
    result: ServiceResult,
    console: Console,
    *,
    verbose: bool = False,
    group_bits: bool = True,
) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Renderer] = {
    "encode": _render_conversion,
    "decode": _render_conversion,
    "decode_hex": _render_conversion,
    "session": _render_session,
    "list_layouts": _render_layout_table,
    "describe_layout": _render_layout_detail,
}
