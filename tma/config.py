"""tma configuration.

Centralised, typed configuration for the scaffolder and the manifest editor.
All settings use Pydantic v2 models so they can be validated at construction
time and serialised to/from JSON or environment variables without
boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from tma.models import ModuleSpec


class ManifestConfig(BaseModel):
    """Locations of the Tuist manifests and the markers used to splice them.

    The anchors match the text written by ``tma init``; hand-written manifests
    must use the same spelling for ``tma create`` to find the lists.
    """

    workspace_file: str = Field(default="Workspace.swift")
    app_project_file: str = Field(default="App/Project.swift")

    projects_anchor: str = Field(default="projects: [")
    app_target_marker: str = Field(default="product: .app")
    dependencies_anchor: str = Field(default="dependencies: [")

    entry_indent: str = Field(default="    ", description="Prefix of every inserted line")
    workspace_closing_indent: str = Field(
        default="    ", description="Indent written before ']' when it is moved to its own line"
    )
    dependencies_closing_indent: str = Field(default=" " * 12)


class Config(BaseModel):
    """Global tma configuration.

    Instances are created once by the CLI entry point, with ``project_root``
    resolved from ``--root`` or the working directory, and then passed through
    the generators and the manifest editor.
    """

    project_root: Path = Field(default=Path("."))
    tuist_version: str = Field(default="4.54.3", min_length=1)
    bundle_id_prefix: str = Field(default="com", min_length=1)
    manifests: ManifestConfig = Field(default_factory=ManifestConfig)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def workspace_path(self) -> Path:
        """Path to ``Workspace.swift`` at the project root."""
        return self.project_root / self.manifests.workspace_file

    @property
    def app_project_path(self) -> Path:
        """Path to the app's ``Project.swift``."""
        return self.project_root / self.manifests.app_project_file

    def module_path(self, spec: ModuleSpec) -> Path:
        """Directory of the module described by *spec*."""
        return self.project_root / spec.relative_path

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            TMA_PROJECT_ROOT, TMA_TUIST_VERSION, TMA_BUNDLE_ID_PREFIX.
        """
        kwargs: dict[str, object] = {}
        if os.environ.get("TMA_PROJECT_ROOT"):
            kwargs["project_root"] = Path(os.environ["TMA_PROJECT_ROOT"])
        if os.environ.get("TMA_TUIST_VERSION"):
            kwargs["tuist_version"] = os.environ["TMA_TUIST_VERSION"]
        if os.environ.get("TMA_BUNDLE_ID_PREFIX"):
            kwargs["bundle_id_prefix"] = os.environ["TMA_BUNDLE_ID_PREFIX"]
        return cls(**kwargs)
