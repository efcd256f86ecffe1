"""Tests for HTML and JSON rendering."""

import json
from datetime import datetime, timezone

from bucket_index.formatting import UNGROUPED_NAME, group_entries
from bucket_index.render import load_template, render_html, render_json

from conftest import make_entry

GENERATED = datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)


class TestRenderJson:
    """Test JSON rendering."""

    def test_shape(self, sample_entries):
        """Test the data/name/urls document structure."""
        document = json.loads(render_json(group_entries(sample_entries)))

        assert document == {
            "data": [
                {
                    "name": "a",
                    "urls": [
                        {"url": "https://cdn.example.com/a/x.txt", "size": 10},
                        {"url": "https://cdn.example.com/a/y.txt", "size": 2048},
                    ],
                },
                {
                    "name": UNGROUPED_NAME,
                    "urls": [{"url": "https://cdn.example.com/root.txt", "size": 5}],
                },
            ]
        }

    def test_empty(self):
        assert json.loads(render_json([])) == {"data": []}


class TestRenderHtml:
    """Test HTML rendering."""

    def test_list_items(self, sample_entries):
        """Test one list item per entry with formatted size and date."""
        page = render_html(
            load_template(), group_entries(sample_entries), title="files", generated_at=GENERATED
        ).decode("utf-8")

        assert page.count("<li>") == 3
        assert "10 B" in page
        assert "2.0 KB" in page
        assert "5 B" in page
        assert "2024-03-01 12:30:45" in page
        assert '<a href="https://cdn.example.com/a/y.txt">y.txt</a>' in page
        assert "<h2>a</h2>" in page
        assert "2024-05-06 07:08:09" in page

    def test_escapes_keys_and_title(self):
        """Test markup in keys and title is escaped."""
        groups = group_entries([make_entry("<b>/x&y.txt")])

        page = render_html(load_template(), groups, title="<t>", generated_at=GENERATED).decode()

        assert "<b>" not in page
        assert "&lt;b&gt;" in page
        assert "x&amp;y.txt" in page
        assert "<title>&lt;t&gt;</title>" in page
