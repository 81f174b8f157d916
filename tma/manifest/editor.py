"""Registration of new modules in the Tuist workspace and app manifests.

Two edits are supported, each bound to one manifest shape:

- ``Workspace.swift``: append ``"Feature/<Name>"`` (or ``"Core/<Name>"``) to
  the ``projects: [...]`` list.
- ``App/Project.swift``: append a ``.project(target:path:)`` dependency to
  the ``dependencies: [...]`` list of the target declared with
  ``product: .app``.

Manifests are optional.  A missing file, one that is not valid UTF-8, or one
whose lists cannot be found produces a warning and leaves the file alone;
only I/O failures propagate.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Callable

from tma.config import Config
from tma.manifest.patcher import (
    AnchorNotFoundError,
    PatchError,
    PatchResult,
    insert_into_list,
)
from tma.models import ModuleKind
from tma.utils import print_step, print_warning, read_text, write_text_atomic


class ManifestStatus(str, Enum):
    """What happened to a manifest during ``tma create``."""
    INSERTED = "inserted"
    ALREADY_PRESENT = "already present"
    MISSING = "missing"
    SKIPPED = "skipped"


# ---------------------------------------------------------------------------
# ManifestDocument
# ---------------------------------------------------------------------------


class ManifestDocument:
    """In-memory copy of a manifest file.

    Read once with :meth:`load`, edited through :meth:`apply`, and written
    back with a single atomic :meth:`save`.
    """

    def __init__(self, path: str | Path, text: str = "") -> None:
        self.path = Path(path).absolute()
        self.text = text
        self.modified = False

    @classmethod
    def load(cls, path: str | Path) -> "ManifestDocument":
        """Read *path* into a new document.  Raises ``OSError`` if unreadable."""
        return cls(path, read_text(path))

    def apply(self, result: PatchResult) -> PatchResult:
        """Adopt the text of *result* if the patch changed anything."""
        if result.changed:
            self.text = result.text
            self.modified = True
        return result

    def save(self) -> bool:
        """Write the document back if it was modified.

        Returns:
            ``True`` if the file was written.
        """
        if not self.modified:
            return False
        write_text_atomic(self.path, self.text)
        self.modified = False
        return True


# ---------------------------------------------------------------------------
# ManifestEditor
# ---------------------------------------------------------------------------


def workspace_entry(kind: ModuleKind, name: str) -> str:
    """The ``projects:`` element for a module, e.g. ``"Feature/Profile"``."""
    return f'"{kind.root_folder}/{name}"'


def dependency_entry(kind: ModuleKind, name: str) -> str:
    """The app dependency on a module, relative to ``App/``."""
    return f'.project(target: "{name}", path: "../{kind.root_folder}/{name}")'


class ManifestEditor:
    """Splices module references into the workspace and app manifests."""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()

    # -- Public API --------------------------------------------------------

    def add_module_to_workspace(
        self, path: str | Path, kind: ModuleKind, name: str
    ) -> ManifestStatus:
        """Add the module's directory to ``Workspace.swift``'s ``projects`` list."""
        settings = self.config.manifests
        entry = workspace_entry(kind, name)

        def patch(document: ManifestDocument) -> PatchResult:
            return insert_into_list(
                document.text,
                settings.projects_anchor,
                entry,
                settings.entry_indent,
                closing_indent=settings.workspace_closing_indent,
            )

        return self._edit(Path(path), entry, patch)

    def add_module_to_app_dependencies(
        self, path: str | Path, kind: ModuleKind, name: str
    ) -> ManifestStatus:
        """Add the module as a dependency of the app target in ``Project.swift``.

        The ``dependencies:`` list is looked up after the ``product: .app``
        marker so that the test target's dependencies are left alone.
        """
        settings = self.config.manifests
        entry = dependency_entry(kind, name)

        def patch(document: ManifestDocument) -> PatchResult:
            marker_at = document.text.find(settings.app_target_marker)
            if marker_at == -1:
                raise AnchorNotFoundError(settings.app_target_marker)
            return insert_into_list(
                document.text,
                settings.dependencies_anchor,
                entry,
                settings.entry_indent,
                search_from=marker_at,
                closing_indent=settings.dependencies_closing_indent,
            )

        return self._edit(Path(path), entry, patch)

    # -- Internals ---------------------------------------------------------

    def _edit(
        self,
        path: Path,
        entry: str,
        patch: Callable[[ManifestDocument], PatchResult],
    ) -> ManifestStatus:
        if not path.is_file():
            print_warning(f"{path.name} not found at {path}, skipping")
            return ManifestStatus.MISSING

        try:
            document = ManifestDocument.load(path)
        except UnicodeDecodeError as exc:
            print_warning(
                f"Could not read {path.name} as UTF-8 ({exc.reason} at byte {exc.start}). "
                f"Add {entry} to it manually."
            )
            return ManifestStatus.SKIPPED

        try:
            result = document.apply(patch(document))
        except PatchError as exc:
            print_warning(
                f"Could not update {path.name}: {exc}. Add {entry} to it manually."
            )
            return ManifestStatus.SKIPPED

        if not result.changed:
            print_step(f"{path.name} already references {entry}")
            return ManifestStatus.ALREADY_PRESENT

        document.save()
        print_step(f"Updated {path.name}")
        return ManifestStatus.INSERTED
