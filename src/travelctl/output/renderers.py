"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from travelctl.output.console import (
    create_console,
    get_output,
    style_for_status,
    style_for_urgency,
)

if TYPE_CHECKING:
    from rich.console import Console

    from travelctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    # For list results, return IDs (or country codes) only
    items = result.data.get("items") or result.data.get("active")
    if items and isinstance(items, list):
        return "\n".join(_extract_id(item) for item in items if _extract_id(item))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_id(item: Any) -> str:
    """Extract an ID from a dict item (visits, visas, countries)."""
    if isinstance(item, dict):
        for key in ("id", "code"):
            val = item.get(key)
            if val is not None:
                return str(val)
        return ""
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="travel.ok")
    op = Text(f"  {result.op}", style="travel.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}:", style="travel.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="travel.id")
    elif key in ("path", "output_file"):
        v = Text(str(value), style="travel.path")
    elif key in ("name", "label"):
        v = Text(str(value), style="travel.title")
    elif key in ("status", "previous_status"):
        v = Text(str(value), style=style_for_status(str(value)))
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _fields(console: Console, data: dict[str, Any], keys: tuple[str, ...]) -> None:
    for key in keys:
        if key in data and data[key] is not None:
            _field(console, key, data[key])


def _country_cell(item: dict[str, Any]) -> Text:
    return Text(f"{item.get('flag', '')} {item.get('name', '')}".strip())


def _status_cell(status: str) -> Text:
    return Text(status, style=style_for_status(status))


def _empty(console: Console, message: str) -> None:
    console.print(Text(f"  {message}", style="dim"))


def _new_table() -> Table:
    return Table(show_header=True, show_lines=False, pad_edge=False, expand=False)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="travel.error")
    op = Text(f"  {result.op}", style="travel.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if err and err.detail.get("diagnostics"):
        for line in err.detail["diagnostics"]:
            console.print(Text(f"  {line}", style="travel.warning"))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            if k != "diagnostics":
                console.print(Text(f"    {k}: {v}"))


# ── Mutation renderers ────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render status, visit and visa mutations."""
    _status_line(console, result)
    d = result.data
    country = d.get("country")
    if isinstance(country, dict):
        _field(console, "country", _country_cell(country).plain)
    elif country is not None:
        _field(console, "country", country)
    _fields(
        console,
        d,
        (
            "id",
            "code",
            "name",
            "status",
            "previous_status",
            "label",
            "type",
            "expiry_date",
            "remaining_days",
        ),
    )
    if verbose:
        _fields(console, d, ("visit_count", "transportation", "note", "granularity"))


# ── Tracking renderers ────────────────────────────────────────────────


def _render_statuses(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    items = result.data.get("items", [])
    _field(console, "count", result.data.get("count", len(items)))
    if not items:
        _empty(console, "No countries marked yet.")
        return
    table = _new_table()
    table.add_column("Code", style="travel.id", no_wrap=True)
    table.add_column("Country")
    table.add_column("Region")
    table.add_column("Status")
    table.add_column("Visits", style="travel.number", justify="right")
    for item in items:
        table.add_row(
            Text(item["code"]),
            _country_cell(item),
            Text(item.get("region", "")),
            _status_cell(item["status"]),
            str(item.get("visit_count", 0)),
        )
    console.print(table)


def _render_visits(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "country", _country_cell(d).plain)
    _fields(console, d, ("status", "count"))
    items = d.get("items", [])
    if not items:
        _empty(console, "No visits recorded.")
        return
    table = _new_table()
    table.add_column("ID", style="travel.id", no_wrap=True)
    table.add_column("Dates", style="travel.title")
    table.add_column("Transport")
    table.add_column("Note")
    if verbose:
        table.add_column("Granularity", style="dim")
    for item in items:
        row = [
            Text(item["id"]),
            Text(item.get("label", "")),
            Text(item.get("transportation") or ""),
            Text(item.get("note") or ""),
        ]
        if verbose:
            row.append(Text(item.get("granularity", "")))
        table.add_row(*row)
    console.print(table)


def _render_catalog(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    items = result.data.get("items", [])
    _field(console, "count", result.data.get("count", len(items)))
    if verbose:
        _field(console, "regions", ", ".join(result.data.get("regions", [])))
    if not items:
        _empty(console, "No countries match.")
        return
    table = _new_table()
    table.add_column("Code", style="travel.id", no_wrap=True)
    table.add_column("Country")
    table.add_column("Region")
    for item in items:
        table.add_row(Text(item["code"]), _country_cell(item), Text(item["region"]))
    console.print(table)


# ── Insight renderers ─────────────────────────────────────────────────


def _render_history(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the visit timeline, most recent first."""
    _status_line(console, result)
    d = result.data
    _fields(console, d, ("total_visits", "unique_countries"))
    items = d.get("items", [])
    if not items:
        _empty(console, "No visits recorded for visited countries.")
        return
    table = _new_table()
    table.add_column("Dates", style="travel.title")
    table.add_column("Country")
    table.add_column("Transport")
    table.add_column("Note")
    if verbose:
        table.add_column("ID", style="travel.id", no_wrap=True)
    for item in items:
        visit = item["visit"]
        row = [
            Text(visit.get("label", "")),
            _country_cell(item),
            Text(visit.get("transportation") or ""),
            Text(visit.get("note") or ""),
        ]
        if verbose:
            row.append(Text(item["id"]))
        table.add_row(*row)
    console.print(table)


def _render_stats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render totals, per-region progress, transport usage and top countries."""
    _status_line(console, result)
    d = result.data
    _fields(console, d, ("total_countries", "visited", "wishlist", "not_visited", "total_visits"))
    _field(console, "visited_percentage", f"{d.get('visited_percentage', 0.0):.1f}%")

    regions = d.get("regions", [])
    if regions:
        console.print()
        table = _new_table()
        table.title = "Regions"
        table.add_column("Region")
        table.add_column("Visited", style="travel.number", justify="right")
        table.add_column("Total", justify="right")
        table.add_column("%", justify="right")
        for region in regions:
            table.add_row(
                Text(region["region"]),
                str(region["visited"]),
                str(region["total"]),
                f"{region['percentage']:.1f}",
            )
        console.print(table)

    transportation = d.get("transportation", {})
    if any(transportation.values()):
        console.print()
        table = _new_table()
        table.title = "Transportation"
        table.add_column("Mode")
        table.add_column("Visits", style="travel.number", justify="right")
        for mode, count in transportation.items():
            table.add_row(mode, str(count))
        console.print(table)

    most_visited = d.get("most_visited", [])
    if most_visited:
        console.print()
        table = _new_table()
        table.title = "Most visited"
        table.add_column("Code", style="travel.id", no_wrap=True)
        table.add_column("Country")
        table.add_column("Visits", style="travel.number", justify="right")
        for item in most_visited:
            table.add_row(Text(item["code"]), _country_cell(item), str(item["visits"]))
        console.print(table)


def _render_visas(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render active visas by urgency, then expired visas."""
    _status_line(console, result)
    d = result.data
    _fields(console, d, ("today", "active_count", "expired_count"))

    active = d.get("active", [])
    if active:
        console.print()
        table = _new_table()
        table.title = "Active"
        table.add_column("ID", style="travel.id", no_wrap=True)
        table.add_column("Country")
        table.add_column("Type")
        table.add_column("Expires")
        table.add_column("Days left", justify="right")
        table.add_column("Stay left", justify="right")
        table.add_column("Urgency")
        for item in active:
            table.add_row(
                Text(item["id"]),
                _country_cell(item["country"]),
                Text(item["type"]),
                Text(item["expiry_date"]),
                Text(
                    str(item["days_until_expiry"]),
                    style=style_for_urgency(item["expiry_urgency"]),
                ),
                Text(str(item["remaining_days"]), style=style_for_urgency(item["stay_urgency"])),
                Text(item["urgency"], style=style_for_urgency(item["urgency"])),
            )
        console.print(table)
    else:
        _empty(console, "No active visas.")

    expired = d.get("expired", [])
    if expired:
        console.print()
        table = _new_table()
        table.title = "Expired"
        table.add_column("ID", style="travel.id", no_wrap=True)
        table.add_column("Country", style="dim")
        table.add_column("Type", style="dim")
        table.add_column("Expired", style="dim")
        for item in expired:
            table.add_row(
                Text(item["id"]),
                _country_cell(item["country"]),
                Text(item["type"]),
                Text(item["expiry_date"]),
            )
        console.print(table)


# ── Transfer renderers ────────────────────────────────────────────────


def _render_export(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render export results with output path and counts."""
    _status_line(console, result)
    _fields(console, result.data, ("output_file", "filename", "country_count", "visit_count"))


def _render_import(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _fields(
        console,
        result.data,
        (
            "mode",
            "country_count",
            "visit_count",
            "skipped_rows",
            "total_countries",
            "total_visits",
        ),
    )


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Tracking
    "set_status": _render_mutation,
    "add_visit": _render_mutation,
    "delete_visit": _render_mutation,
    "list_statuses": _render_statuses,
    "list_visits": _render_visits,
    "list_countries": _render_catalog,
    # Insights
    "history": _render_history,
    "stats": _render_stats,
    # Visas
    "add_visa": _render_mutation,
    "delete_visa": _render_mutation,
    "visas": _render_visas,
    # Transfer
    "export_csv": _render_export,
    "import_csv": _render_import,
}
