"""Shared pytest fixtures for the tma test suite.

Provides reusable fixtures for:
- Temporary project roots and the matching ``Config``
- Hand-written ``Workspace.swift`` / ``App/Project.swift`` manifests
- A project tree generated by ``tma init``
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from tma.config import Config
from tma.scaffolder import ProjectGenerator


# ---------------------------------------------------------------------------
# Manifest text
# ---------------------------------------------------------------------------

WORKSPACE_INLINE = textwrap.dedent(
    """\
    import ProjectDescription

    let workspace = Workspace(
        name: "Demo",
        projects: ["App"]
    )
    """
)

APP_PROJECT_EMPTY_DEPS = textwrap.dedent(
    """\
    import ProjectDescription

    let project = Project(
        name: "Demo",
        targets: [
            .target(
                name: "Demo",
                destinations: .iOS,
                product: .app,
                bundleId: "com.demo.app",
                sources: ["Sources/**"],
                dependencies: []
            ),
            .target(
                name: "DemoTests",
                destinations: .iOS,
                product: .unitTests,
                bundleId: "com.demo.app.tests",
                sources: ["Tests/**"],
                dependencies: [
                    .target(name: "Demo")
                ]
            ),
        ]
    )
    """
)


@pytest.fixture
def workspace_text() -> str:
    """``Workspace.swift`` with the projects list on a single line."""
    return WORKSPACE_INLINE


@pytest.fixture
def app_project_text() -> str:
    """``App/Project.swift`` whose app target has ``dependencies: []``."""
    return APP_PROJECT_EMPTY_DEPS


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty project root directory (auto-cleanup)."""
    root = tmp_path / "Demo"
    root.mkdir()
    return root


@pytest.fixture
def config(project_root: Path) -> Config:
    """Configuration pointing at ``project_root``."""
    return Config(project_root=project_root)


@pytest.fixture
def hand_written_project(project_root: Path, workspace_text: str, app_project_text: str) -> Path:
    """Project root containing the hand-written manifests above."""
    (project_root / "Workspace.swift").write_text(workspace_text, encoding="utf-8")
    app_dir = project_root / "App"
    app_dir.mkdir()
    (app_dir / "Project.swift").write_text(app_project_text, encoding="utf-8")
    return project_root


@pytest.fixture
def initialized_project(tmp_path: Path) -> Path:
    """Project tree produced by ``ProjectGenerator`` (``tma init Sample``)."""
    generator = ProjectGenerator(Config(project_root=tmp_path))
    return generator.generate(generator.spec_for("Sample"))
