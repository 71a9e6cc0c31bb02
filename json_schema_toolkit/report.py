"""
Human-readable validation reports.
"""

from __future__ import annotations

from pathlib import Path

import jinja2

from .errors import ValidationError, format_pointer

TEMPLATE_DIR = Path(__file__).parent / "templates"


class ReportRenderer:
    """Renders validation errors with the bundled Jinja2 template."""

    TEMPLATE_NAME = "validation_report.txt.jinja2"

    def __init__(self):
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
            lstrip_blocks=True,
            trim_blocks=True,
        )
        self.jinja_env.filters["pointer"] = format_pointer
        self.template = self.jinja_env.get_template(self.TEMPLATE_NAME)

    def render(self, errors: list[ValidationError], source: str = "instance", command: str | None = None) -> str:
        """
        Render a report.

        Args:
            errors: Errors returned by `validate`
            source: Name of the validated document, shown in the summary line
            command: Command line to show as a header, if any

        Returns:
            The report text
        """
        return self.template.render(errors=errors, source=source, command=command)


def render_report(errors: list[ValidationError], source: str = "instance", command: str | None = None) -> str:
    return ReportRenderer().render(errors, source=source, command=command)
