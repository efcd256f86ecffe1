"""HTML and JSON rendering of grouped listings."""

from datetime import datetime
from html import escape
from importlib import resources
from string import Template
from typing import List, Sequence

from .formatting import format_timestamp, human_readable_size, short_name
from .models import FileItem, Group, GroupItem, ListingResponse


def load_template() -> Template:
    """Load the page template shipped with the package."""
    source = resources.files("bucket_index").joinpath("templates/index.html").read_text(
        encoding="utf-8"
    )
    return Template(source)


def _render_group(group: Group) -> str:
    items: List[str] = []
    for entry in group.entries:
        items.append(
            "      <li>"
            f'<a href="{escape(entry.url)}">{escape(short_name(entry.key))}</a>'
            f'<span class="size">{escape(human_readable_size(entry.size))}</span>'
            f'<span class="modified">{escape(format_timestamp(entry.last_modified))}</span>'
            "</li>"
        )
    return "\n".join(
        [
            "  <section>",
            f"    <h2>{escape(group.name)}</h2>",
            "    <ul>",
            *items,
            "    </ul>",
            "  </section>",
        ]
    )


def render_html(
    template: Template, groups: Sequence[Group], *, title: str, generated_at: datetime
) -> bytes:
    """Render the listing page.

    Args:
        template: Page template with ``$title``, ``$groups`` and
            ``$generated_at`` placeholders
        groups: Groups to render, in display order
        title: Page title (escaped)
        generated_at: Snapshot creation time shown in the footer

    Returns:
        UTF-8 encoded HTML
    """
    page = template.substitute(
        title=escape(title),
        groups="\n".join(_render_group(group) for group in groups),
        generated_at=escape(format_timestamp(generated_at)),
    )
    return page.encode("utf-8")


def render_json(groups: Sequence[Group]) -> bytes:
    """Render the listing as ``{"data": [{"name", "urls": [...]}]}``."""
    response = ListingResponse(
        data=[
            GroupItem(
                name=group.name,
                urls=[FileItem(url=entry.url, size=entry.size) for entry in group.entries],
            )
            for group in groups
        ]
    )
    return response.model_dump_json().encode("utf-8")
