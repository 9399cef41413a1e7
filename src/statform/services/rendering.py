"""HTML rendering for the form page.

Rendering is a pure function of a ``PageContext``: the route gathers the data,
the renderer turns it into markup through the Jinja2 templates shipped in
``statform/templates``.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Literal

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

from statform.core.settings import Settings
from statform.services.statistics import (
    PLACEHOLDER,
    StoredStatistics,
    format_currency,
)

NoticeKind = Literal["error", "success"]

STORED_VALUES_ERROR = "Error loading stored values"


@dataclass(frozen=True)
class Notice:
    """A one-line message shown above the form."""

    kind: NoticeKind
    text: str


@dataclass(frozen=True)
class PageContext:
    """Everything the page template needs."""

    app_name: str
    field_count: int
    tax_rate: float
    stored: StoredStatistics
    notices: tuple[Notice, ...] = field(default_factory=tuple)
    form_action: str = "/"
    static_prefix: str = "/static"


def _display(value: object) -> str:
    return PLACEHOLDER if value is None else str(value)


def build_environment() -> Environment:
    """Return the Jinja2 environment used for every page."""
    env = Environment(
        loader=PackageLoader("statform", "templates"),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["currency"] = format_currency
    env.filters["display"] = _display
    return env


class PageRenderer:
    """Render the form page with its live and stored statistics panels."""

    template_name = "index.html"

    def __init__(self, settings: Settings, env: Environment | None = None) -> None:
        self.settings = settings
        self.env = env or build_environment()

    def field_count(self) -> int:
        """Number of inputs to show; random multiple of three unless configured."""
        if self.settings.field_count is not None:
            return self.settings.field_count
        return random.randint(2, 4) * 3

    def build_context(
        self,
        stored: StoredStatistics,
        notices: list[Notice] | None = None,
    ) -> PageContext:
        return PageContext(
            app_name=self.settings.app_name,
            field_count=self.field_count(),
            tax_rate=self.settings.sales_tax_rate,
            stored=stored,
            notices=tuple(notices or ()),
        )

    def render(self, context: PageContext) -> str:
        """Render ``context`` into a complete HTML document."""
        template = self.env.get_template(self.template_name)
        return template.render(
            page=context,
            stored=context.stored,
            stored_error=STORED_VALUES_ERROR,
        )
