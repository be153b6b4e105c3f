"""Text rendering of the fleet report view.

Styling is isolated behind the four :class:`Renderer` roles so the report
layout can be rendered (and tested) with no terminal styling at all.
"""

import functools
from pathlib import Path
from typing import Any, Protocol

import click
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .models.report_config import StylesConfig

RULE = "-" * 36


class Renderer(Protocol):
    """Presentation roles used by the text report.

    ``divider`` covers rules, section subtitles and nested breakdown keys.
    """

    def emphasize(self, text: Any) -> str: ...

    def divider(self, text: Any) -> str: ...

    def entity(self, text: Any) -> str: ...

    def value(self, text: Any) -> str: ...


class PlainRenderer:
    def emphasize(self, text: Any) -> str:
        return str(text)

    def divider(self, text: Any) -> str:
        return str(text)

    def entity(self, text: Any) -> str:
        return str(text)

    def value(self, text: Any) -> str:
        return str(text)


class StyledRenderer:
    """Renderer backed by ``click.style``, one style dict per role."""

    def __init__(self, styles: StylesConfig | None = None) -> None:
        self.styles = styles or StylesConfig()

    def emphasize(self, text: Any) -> str:
        return click.style(str(text), **self.styles.emphasize)

    def divider(self, text: Any) -> str:
        return click.style(str(text), **self.styles.divider)

    def entity(self, text: Any) -> str:
        return click.style(str(text), **self.styles.entity)

    def value(self, text: Any) -> str:
        return click.style(str(text), **self.styles.value)


@functools.lru_cache(maxsize=1)
def get_jinja_env() -> Environment:
    """Return a cached Jinja2 Environment for the plain-text report templates."""
    template_dir = Path(__file__).parent / "templates"
    return Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


def render_text(view: dict[str, Any], renderer: Renderer | None = None) -> str:
    """Render a report view (see ``build_fleet_report_view``) to text."""
    template = get_jinja_env().get_template("fleet_report.txt.j2")
    return template.render(sections=view["sections"], rule=RULE, style=renderer or PlainRenderer())
