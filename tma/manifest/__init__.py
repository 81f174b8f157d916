"""Manifest splicing: insert entries into lists inside Tuist manifests.

Quick usage::

    from tma.manifest import ManifestEditor
    from tma.models import ModuleKind

    editor = ManifestEditor()
    editor.add_module_to_workspace("Workspace.swift", ModuleKind.FEATURE, "Profile")
"""

from tma.manifest.editor import ManifestDocument, ManifestEditor, ManifestStatus
from tma.manifest.patcher import (
    AnchorNotFoundError,
    ClosingBracketNotFoundError,
    InsertionTarget,
    PatchError,
    PatchResult,
    PatchStatus,
    find_closing_bracket,
    insert_into_list,
)

__all__ = [
    "AnchorNotFoundError",
    "ClosingBracketNotFoundError",
    "InsertionTarget",
    "ManifestDocument",
    "ManifestEditor",
    "ManifestStatus",
    "PatchError",
    "PatchResult",
    "PatchStatus",
    "find_closing_bracket",
    "insert_into_list",
]
