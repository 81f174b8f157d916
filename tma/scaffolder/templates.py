"""Jinja2 template rendering for project and module scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``tma/scaffolder/templates/`` directory and renders them with project- or
module-specific context data.  Supports single-file rendering, tree
rendering (where output file names may themselves contain template
expressions, e.g. ``Example/{{ name }}App.swift.j2``) and string rendering.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from tma.utils import write_text_atomic


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for scaffolding.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  Undefined context variables raise instead of
    rendering as empty strings, so a missing key cannot silently produce a
    broken manifest.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"module/Project.swift.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context)

    # -- File-based rendering ----------------------------------------------

    def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically and the file is written
        atomically.  Returns the output path.
        """
        content = self.render(template_path, context)
        return write_text_atomic(output_path, content)

    def render_tree(
        self,
        template_prefix: str,
        output_dir: str | Path,
        context: dict[str, Any],
    ) -> list[Path]:
        """Render every ``*.j2`` file under *template_prefix* to *output_dir*.

        The directory structure is preserved and each relative path is itself
        rendered, so ``module/Example/{{ name }}App.swift.j2`` rendered with
        ``name="Profile"`` writes ``<output_dir>/Example/ProfileApp.swift``.

        Returns:
            List of written file paths, in template order.
        """
        prefix_path = self.template_dir / template_prefix
        if not prefix_path.is_dir():
            return []

        written: list[Path] = []
        out_base = Path(output_dir)

        for template_file in sorted(prefix_path.rglob("*.j2")):
            rel = template_file.relative_to(prefix_path).as_posix()
            output_name = self.render_string(rel[: -len(".j2")], context)
            template_key = f"{template_prefix}/{rel}"
            written.append(
                self.render_to_file(template_key, out_base / output_name, context)
            )

        return written

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template root directory.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )
