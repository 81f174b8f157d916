"""Tests for ManifestEditor and ManifestDocument (tma.manifest.editor)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from tma.config import Config, ManifestConfig
from tma.manifest.editor import (
    ManifestDocument,
    ManifestEditor,
    ManifestStatus,
    dependency_entry,
    workspace_entry,
)
from tma.manifest.patcher import PatchStatus, insert_into_list
from tma.models import ModuleKind


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Entry builders
# ---------------------------------------------------------------------------


class TestEntries:
    def test_workspace_entry_feature(self):
        assert workspace_entry(ModuleKind.FEATURE, "Profile") == '"Feature/Profile"'

    def test_workspace_entry_core(self):
        assert workspace_entry(ModuleKind.CORE, "Network") == '"Core/Network"'

    def test_dependency_entry(self):
        assert (
            dependency_entry(ModuleKind.FEATURE, "Profile")
            == '.project(target: "Profile", path: "../Feature/Profile")'
        )


# ---------------------------------------------------------------------------
# ManifestDocument
# ---------------------------------------------------------------------------


class TestManifestDocument:
    def test_load_and_save_unmodified(self, tmp_path: Path):
        path = tmp_path / "Workspace.swift"
        path.write_text('projects: ["App"]', encoding="utf-8")
        document = ManifestDocument.load(path)

        assert document.path.is_absolute()
        assert document.text == 'projects: ["App"]'
        assert document.save() is False

    def test_apply_and_save(self, tmp_path: Path):
        path = tmp_path / "Workspace.swift"
        path.write_text('projects: ["App"]', encoding="utf-8")
        document = ManifestDocument.load(path)

        result = document.apply(insert_into_list(document.text, "projects: [", '"Core/A"'))

        assert result.status is PatchStatus.INSERTED
        assert document.modified
        assert document.save() is True
        assert '"Core/A"' in path.read_text(encoding="utf-8")
        assert not document.modified

    def test_crlf_line_endings_are_preserved(self, tmp_path: Path):
        path = tmp_path / "Workspace.swift"
        path.write_bytes(b'projects: [\r\n    "App",\r\n]\r\n')
        document = ManifestDocument.load(path)
        document.apply(insert_into_list(document.text, "projects: [", '"Core/A"'))
        document.save()

        raw = path.read_bytes()
        assert raw.startswith(b'projects: [\r\n    "App",\r\n')
        assert raw.endswith(b"]\r\n")

    def test_failed_write_leaves_original(self, tmp_path: Path):
        path = tmp_path / "Workspace.swift"
        path.write_text('projects: ["App"]', encoding="utf-8")
        document = ManifestDocument.load(path)
        document.apply(insert_into_list(document.text, "projects: [", '"Core/A"'))

        with patch.object(Path, "replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                document.save()

        assert path.read_text(encoding="utf-8") == 'projects: ["App"]'
        assert [p.name for p in tmp_path.iterdir()] == ["Workspace.swift"]


# ---------------------------------------------------------------------------
# ManifestEditor: workspace
# ---------------------------------------------------------------------------


class TestAddModuleToWorkspace:
    def test_inserts_entry(self, hand_written_project: Path):
        path = hand_written_project / "Workspace.swift"
        status = ManifestEditor().add_module_to_workspace(path, ModuleKind.FEATURE, "Profile")

        text = path.read_text(encoding="utf-8")
        assert status is ManifestStatus.INSERTED
        assert '"Feature/Profile"' in text
        assert text.index('"App"') < text.index('"Feature/Profile"')
        assert '"Feature/Profile",\n    ]' in text

    def test_second_call_is_noop(self, hand_written_project: Path):
        path = hand_written_project / "Workspace.swift"
        editor = ManifestEditor()
        editor.add_module_to_workspace(path, ModuleKind.CORE, "Network")
        first = path.read_text(encoding="utf-8")
        mtime = path.stat().st_mtime_ns

        status = editor.add_module_to_workspace(path, ModuleKind.CORE, "Network")

        assert status is ManifestStatus.ALREADY_PRESENT
        assert path.read_text(encoding="utf-8") == first
        assert path.stat().st_mtime_ns == mtime

    def test_missing_file_is_skipped(self, tmp_path: Path, capsys):
        status = ManifestEditor().add_module_to_workspace(
            tmp_path / "Workspace.swift", ModuleKind.CORE, "Network"
        )

        assert status is ManifestStatus.MISSING
        assert not (tmp_path / "Workspace.swift").exists()
        assert "Workspace.swift not found" in capsys.readouterr().err

    def test_unexpected_shape_is_skipped(self, tmp_path: Path, capsys):
        path = tmp_path / "Workspace.swift"
        original = 'let workspace = Workspace(name: "Demo")\n'
        path.write_text(original, encoding="utf-8")

        status = ManifestEditor().add_module_to_workspace(path, ModuleKind.FEATURE, "Home")

        assert status is ManifestStatus.SKIPPED
        assert path.read_text(encoding="utf-8") == original
        err = capsys.readouterr().err
        assert "manually" in err

    def test_non_utf8_file_is_skipped(self, tmp_path: Path, capsys):
        path = tmp_path / "Workspace.swift"
        original = b'// caf\xe9\nlet workspace = Workspace(projects: ["App"])\n'
        path.write_bytes(original)

        status = ManifestEditor().add_module_to_workspace(path, ModuleKind.FEATURE, "Home")

        assert status is ManifestStatus.SKIPPED
        assert path.read_bytes() == original
        err = capsys.readouterr().err
        assert "Could not read Workspace.swift as UTF-8" in err

    def test_custom_anchor_from_config(self, tmp_path: Path):
        path = tmp_path / "Workspace.swift"
        path.write_text("projects:[\n]\n", encoding="utf-8")
        config = Config(manifests=ManifestConfig(projects_anchor="projects:[", workspace_closing_indent=""))

        status = ManifestEditor(config).add_module_to_workspace(path, ModuleKind.CORE, "Db")

        assert status is ManifestStatus.INSERTED
        assert path.read_text(encoding="utf-8") == 'projects:[\n    "Core/Db",\n]\n'


# ---------------------------------------------------------------------------
# ManifestEditor: app dependencies
# ---------------------------------------------------------------------------


class TestAddModuleToAppDependencies:
    def test_inserts_into_app_target_only(self, hand_written_project: Path):
        path = hand_written_project / "App" / "Project.swift"
        status = ManifestEditor().add_module_to_app_dependencies(
            path, ModuleKind.FEATURE, "Profile"
        )

        text = path.read_text(encoding="utf-8")
        line = '.project(target: "Profile", path: "../Feature/Profile")'
        assert status is ManifestStatus.INSERTED
        assert text.count(line) == 1
        # Lands in the app target, before the test target's block.
        assert text.index(line) < text.index("product: .unitTests")
        assert text.index(line) > text.index("product: .app")

    def test_ignores_dependencies_before_app_target(self, tmp_path: Path):
        path = tmp_path / "Project.swift"
        path.write_text(
            "let a = Target(dependencies: [\n])\n"
            "let b = Target(product: .app, dependencies: [\n])\n",
            encoding="utf-8",
        )

        ManifestEditor().add_module_to_app_dependencies(path, ModuleKind.CORE, "Net")

        text = path.read_text(encoding="utf-8")
        first_list = text[: text.index("product: .app")]
        assert "Net" not in first_list
        assert '.project(target: "Net", path: "../Core/Net"),' in text

    def test_missing_app_target(self, tmp_path: Path, capsys):
        path = tmp_path / "Project.swift"
        original = "let project = Project(name: \"Lib\", targets: [])\n"
        path.write_text(original, encoding="utf-8")

        status = ManifestEditor().add_module_to_app_dependencies(path, ModuleKind.CORE, "Net")

        assert status is ManifestStatus.SKIPPED
        assert path.read_text(encoding="utf-8") == original
        assert "Could not update Project.swift" in capsys.readouterr().err

    def test_missing_file(self, tmp_path: Path):
        status = ManifestEditor().add_module_to_app_dependencies(
            tmp_path / "App" / "Project.swift", ModuleKind.CORE, "Net"
        )
        assert status is ManifestStatus.MISSING

    def test_unreadable_file_propagates(self, hand_written_project: Path):
        path = hand_written_project / "App" / "Project.swift"
        with patch("tma.manifest.editor.read_text", side_effect=PermissionError(13, "denied")):
            with pytest.raises(PermissionError):
                ManifestEditor().add_module_to_app_dependencies(path, ModuleKind.CORE, "Net")
