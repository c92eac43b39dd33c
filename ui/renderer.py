"""
Plain-text rendering of view models for the admin console.
"""

from typing import Any, List, Optional

from ui.data_table import TableView
from ui.notifications import Toast
from ui.pagination import Pagination

def _cell(value: Any) -> str:
    if value is None:
        return ""
    return str(value).replace("\n", " ")

def render_table(view: TableView) -> str:
    lines = [f"== {view.title} =="]
    if view.empty:
        width = max(len(" | ".join(view.headers)), len(view.rows[0][0]))
        lines.append(" | ".join(view.headers))
        lines.append("-" * width)
        lines.append(view.rows[0][0].center(width))
        return "\n".join(lines)

    table = [view.headers] + [[_cell(value) for value in row] for row in view.rows]
    widths = [max(len(row[i]) if i < len(row) else 0 for row in table)
              for i in range(len(view.headers))]
    numbered = ["#"] + [str(i) for i in range(1, len(view.rows) + 1)]
    index_width = max(len(n) for n in numbered)

    for position, row in enumerate(table):
        padded = [(row[i] if i < len(row) else "").ljust(widths[i]) for i in range(len(widths))]
        lines.append(f"{numbered[position].rjust(index_width)}  " + " | ".join(padded).rstrip())
        if position == 0:
            lines.append("-" * (index_width + 2 + sum(widths) + 3 * (len(widths) - 1)))
    return "\n".join(lines)

def render_pagination(pagination: Optional[Pagination]) -> str:
    if pagination is None:
        return ""
    return f"{pagination.summary()}    {pagination.position()}"

def render_toast(toast: Toast) -> str:
    icon = "❌" if toast.is_error else "✅"
    return f"{icon} {toast.title}: {toast.description}"

def render_lines(title: str, rows: List[tuple]) -> str:
    """Key/value block, e.g. for detail views and dashboard cards."""
    width = max((len(str(label)) for label, _ in rows), default=0)
    lines = [f"== {title} =="]
    lines.extend(f"{str(label).ljust(width)} : {_cell(value)}" for label, value in rows)
    return "\n".join(lines)
