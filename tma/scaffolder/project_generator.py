"""Project scaffolding for ``tma init``.

Renders a fresh Tuist project: the app subproject, the
ProjectDescriptionHelpers with the feature/core ``Project`` factories, the
Tuist package and config manifests, ``mise.toml`` and ``Workspace.swift``.
Nothing is patched here; every file is written from a template.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from tma.config import Config
from tma.models import DirectoryAlreadyExistsError, ProjectSpec
from tma.utils import print_step

from .templates import TemplateRenderer


# Directories created even when no template lands in them.
PROJECT_DIRS: tuple[str, ...] = (
    "App/Sources",
    "App/Resources",
    "App/Tests",
    "Tuist/ProjectDescriptionHelpers",
)


class ProjectGenerator:
    """Creates ``<project_root>/<name>/`` for a new project."""

    def __init__(
        self,
        config: Config | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config or Config()
        self.renderer = renderer or TemplateRenderer()

    def spec_for(self, name: str) -> ProjectSpec:
        """Build a :class:`ProjectSpec` using the configured defaults."""
        return ProjectSpec(
            name=name,
            bundle_id_prefix=self.config.bundle_id_prefix,
            tuist_version=self.config.tuist_version,
        )

    def generate(self, spec: ProjectSpec) -> Path:
        """Generate the project tree.

        Returns:
            Path to the generated project root.

        Raises:
            DirectoryAlreadyExistsError: The project directory already exists.
            OSError: A directory or file could not be written.
        """
        project_root = self.config.project_root / spec.name
        if project_root.exists():
            raise DirectoryAlreadyExistsError(project_root)

        project_root.mkdir(parents=True)
        for d in PROJECT_DIRS:
            (project_root / d).mkdir(parents=True, exist_ok=True)

        written = self.renderer.render_tree(
            "project", project_root, self._build_context(spec)
        )
        for path in written:
            print_step(f"Created {path.relative_to(project_root).as_posix()}")

        return project_root

    def _build_context(self, spec: ProjectSpec) -> dict[str, Any]:
        return {
            "name": spec.name,
            "bundle_id": spec.bundle_id,
            "tuist_version": spec.tuist_version,
        }
