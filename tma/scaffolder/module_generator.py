"""Module scaffolding for ``tma create``.

Creates ``Feature/<Name>`` or ``Core/<Name>`` under the project root with its
``Project.swift``, one stub per source folder and an example app, then
registers the module in ``Workspace.swift`` and ``App/Project.swift``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from tma.config import Config
from tma.manifest.editor import ManifestEditor, ManifestStatus
from tma.models import ModuleAlreadyExistsError, ModuleSpec
from tma.utils import ensure_dir, print_step

from .templates import TemplateRenderer


# Folders created inside every module; all but Resources get a stub file.
MODULE_SUBDIRS: tuple[str, ...] = (
    "Interface",
    "Sources",
    "Resources",
    "Tests",
    "Testing",
    "Example",
)


class ModuleStage(str, Enum):
    """Progress of a module generation run, in order."""
    START = "start"
    ROOT_DIR_ENSURED = "root_dir_ensured"
    MODULE_DIR_CREATED = "module_dir_created"
    PROJECT_FILE_WRITTEN = "project_file_written"
    SUBDIRS_AND_STUBS_WRITTEN = "subdirs_and_stubs_written"
    WORKSPACE_PATCHED = "workspace_patched"
    APP_PROJECT_PATCHED = "app_project_patched"
    DONE = "done"


@dataclass
class ModuleReport:
    """Result of :meth:`ModuleGenerator.generate`."""

    spec: ModuleSpec
    path: Path
    files: list[Path] = field(default_factory=list)
    workspace: ManifestStatus | None = None
    app_project: ManifestStatus | None = None


class ModuleGenerator:
    """Creates one feature or core module inside an existing project.

    ``stage`` records how far the last :meth:`generate` call got; a failure
    leaves it at the last completed stage and whatever was already written
    stays on disk.
    """

    def __init__(
        self,
        config: Config | None = None,
        renderer: TemplateRenderer | None = None,
        editor: ManifestEditor | None = None,
    ) -> None:
        self.config = config or Config()
        self.renderer = renderer or TemplateRenderer()
        self.editor = editor or ManifestEditor(self.config)
        self.stage = ModuleStage.START

    # -- Public API --------------------------------------------------------

    def generate(self, spec: ModuleSpec) -> ModuleReport:
        """Scaffold the module described by *spec* and register it.

        Raises:
            ModuleAlreadyExistsError: The module directory already exists.
            OSError: A directory or file could not be written.
        """
        self.stage = ModuleStage.START
        root = self.config.project_root
        module_path = self.config.module_path(spec)
        report = ModuleReport(spec=spec, path=module_path)
        context = self._build_context(spec)

        # 1. Feature/ or Core/
        kind_root = root / spec.kind.root_folder
        if not kind_root.is_dir():
            ensure_dir(kind_root)
            print_step(f"Created {spec.kind.root_folder}/")
        self._advance(ModuleStage.ROOT_DIR_ENSURED)

        # 2. Module folder
        if module_path.exists():
            raise ModuleAlreadyExistsError(spec.name, module_path)
        module_path.mkdir(parents=True)
        print_step(f"Created {spec.relative_path}/")
        self._advance(ModuleStage.MODULE_DIR_CREATED)

        # 3. Project.swift
        report.files.append(
            self.renderer.render_to_file(
                "module/Project.swift.j2", module_path / "Project.swift", context
            )
        )
        print_step(f"Created {spec.relative_path}/Project.swift")
        self._advance(ModuleStage.PROJECT_FILE_WRITTEN)

        # 4. Source folders and stubs
        for subdir in MODULE_SUBDIRS:
            (module_path / subdir).mkdir(exist_ok=True)
        report.files.extend(
            self.renderer.render_tree("module_stubs", module_path, context)
        )
        print_step(f"Created {', '.join(MODULE_SUBDIRS)}")
        self._advance(ModuleStage.SUBDIRS_AND_STUBS_WRITTEN)

        # 5-6. Manifests; failures are reported by the editor and never undo
        # the scaffolding above.
        report.workspace = self.editor.add_module_to_workspace(
            self.config.workspace_path, spec.kind, spec.name
        )
        self._advance(ModuleStage.WORKSPACE_PATCHED)

        report.app_project = self.editor.add_module_to_app_dependencies(
            self.config.app_project_path, spec.kind, spec.name
        )
        self._advance(ModuleStage.APP_PROJECT_PATCHED)

        self._advance(ModuleStage.DONE)
        return report

    # -- Internals ---------------------------------------------------------

    def _build_context(self, spec: ModuleSpec) -> dict[str, Any]:
        return {
            "name": spec.name,
            "kind": spec.kind.value,
            "factory": spec.kind.factory,
        }

    def _advance(self, stage: ModuleStage) -> None:
        self.stage = stage
