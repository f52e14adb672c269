"""
HTML table for the catalog.

One template serves every page: the sortable/searchable table comes from
DataTables in the browser and README files open in a modal rendered with
marked. Everything substituted into the page is autoescaped.
"""

import os
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .config import PAGE_TITLE
from .models import PluginRecord

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")
TEMPLATE_NAME = "plugins_table.html"

env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(["html", "xml"]),
)


def format_date(value: Optional[str]) -> str:
    """`2024-03-01T12:00:00Z` -> `2024-03-01`."""
    return value[:10] if value else ""


def format_generated(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%d-%m-%Y, %H:%M:%S")


env.filters["date"] = format_date


def render_html(records: Iterable[PluginRecord], title: str = PAGE_TITLE,
                generated_at: Optional[datetime] = None) -> str:
    rows: List[PluginRecord] = list(records)
    template = env.get_template(TEMPLATE_NAME)
    return template.render(
        title=title,
        plugins=rows,
        count=len(rows),
        generated=format_generated(generated_at or datetime.now(timezone.utc)),
    )


def write_html(records: Iterable[PluginRecord], path: str, title: str = PAGE_TITLE,
               generated_at: Optional[datetime] = None) -> int:
    rows = list(records)
    html = render_html(rows, title=title, generated_at=generated_at)
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(html)
    return len(rows)
