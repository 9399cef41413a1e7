"""Tests for the page renderer, independent of HTTP and the database."""

import re

from statform.core.settings import Settings
from statform.services.rendering import Notice, PageRenderer
from statform.services.statistics import StoredStatistics


def _stat(html: str, name: str) -> str:
    match = re.search(rf'data-stat="{name}">([^<]*)<', html)
    assert match is not None, name
    return match.group(1)


def test_renders_configured_number_of_fields(test_settings):
    renderer = PageRenderer(test_settings)
    html = renderer.render(renderer.build_context(StoredStatistics(tax_rate=0.05)))

    assert html.count('name="values"') == test_settings.field_count
    assert "in the following 6 fields" in html
    assert 'id="field-5"' in html
    assert 'id="field-6"' not in html


def test_random_field_count_is_a_multiple_of_three():
    renderer = PageRenderer(Settings(database_url="sqlite://"))
    for _ in range(20):
        assert renderer.field_count() in {6, 9, 12}


def test_live_panel_starts_empty(test_settings):
    renderer = PageRenderer(test_settings)
    html = renderer.render(renderer.build_context(StoredStatistics(tax_rate=0.05)))

    assert '<div id="calculations-field" class="calculations-field" aria-live="polite"></div>' in html
    assert 'name="sales_tax_rate" value="0.05"' in html


def test_empty_store_renders_placeholders(test_settings):
    renderer = PageRenderer(test_settings)
    html = renderer.render(renderer.build_context(StoredStatistics(tax_rate=0.05)))

    for name in ("lowest", "highest", "total", "mean", "mode", "total-with-tax"):
        assert _stat(html, name) == "-"
    assert "error-box" not in html
    assert "Total w/ 5.00% Sales Tax:" in html


def test_stored_statistics_are_formatted(test_settings):
    stored = StoredStatistics(
        tax_rate=0.05,
        lowest=5,
        highest=70,
        total=1000,
        mean=25,
        modes=(5, 7),
    )
    renderer = PageRenderer(test_settings)
    html = renderer.render(renderer.build_context(stored))

    assert _stat(html, "lowest") == "5"
    assert _stat(html, "highest") == "70"
    assert _stat(html, "total") == "$1,000.00"
    assert _stat(html, "mean") == "25"
    assert _stat(html, "mode") == "Multiple (5, 7)"
    assert _stat(html, "total-with-tax") == "$1,050.00"


def test_query_error_renders_banner(test_settings):
    renderer = PageRenderer(test_settings)
    html = renderer.render(renderer.build_context(StoredStatistics.unavailable(0.05)))

    assert "Error loading stored values" in html
    assert _stat(html, "total") == "-"


def test_notices_are_escaped(test_settings):
    renderer = PageRenderer(test_settings)
    context = renderer.build_context(
        StoredStatistics(tax_rate=0.05),
        [Notice("error", "<script>alert(1)</script>")],
    )
    html = renderer.render(context)

    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html
