"""Pydantic models and exceptions for project and module scaffolding."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tma.utils import is_valid_identifier


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Raised when scaffolding cannot continue."""


class AlreadyExistsError(ScaffoldError):
    """Raised when the directory to scaffold is already present on disk."""

    def __init__(self, path, message: str) -> None:
        self.path = path
        super().__init__(message)


class ModuleAlreadyExistsError(AlreadyExistsError):
    """Raised by ``tma create`` when the module directory exists."""

    def __init__(self, name: str, path) -> None:
        self.name = name
        super().__init__(path, f"Module '{name}' already exists at {path}")


class DirectoryAlreadyExistsError(AlreadyExistsError):
    """Raised by ``tma init`` when the project root is already occupied."""

    def __init__(self, path) -> None:
        super().__init__(path, f"Directory already exists: {path}")


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class ModuleKind(str, Enum):
    """Which half of the module graph a module belongs to."""
    FEATURE = "feature"
    CORE = "core"

    @property
    def root_folder(self) -> str:
        """Top-level directory holding modules of this kind."""
        return "Feature" if self is ModuleKind.FEATURE else "Core"

    @property
    def factory(self) -> str:
        """Name of the ``Project`` factory in ProjectDescriptionHelpers."""
        return self.value


# ---------------------------------------------------------------------------
# Specs
# ---------------------------------------------------------------------------


def _check_name(value: str) -> str:
    if not value:
        raise ValueError("name must not be empty")
    if not is_valid_identifier(value):
        raise ValueError(
            f"'{value}' is not a valid name: use letters, digits and underscores, "
            "starting with a letter or underscore"
        )
    return value


class ModuleSpec(BaseModel):
    """A module to create under ``Feature/`` or ``Core/``."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Module name, e.g. 'Profile'")
    kind: ModuleKind = Field(..., description="Feature or core module")

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return _check_name(value)

    @property
    def relative_path(self) -> str:
        """Module directory relative to the project root, e.g. ``Feature/Profile``."""
        return f"{self.kind.root_folder}/{self.name}"


class ProjectSpec(BaseModel):
    """A fresh project created by ``tma init``."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Project and app target name")
    bundle_id_prefix: str = Field(default="com")
    tuist_version: str = Field(default="4.54.3")

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return _check_name(value)

    @property
    def bundle_id(self) -> str:
        """Bundle identifier of the app target, e.g. ``com.myapp.app``."""
        return f"{self.bundle_id_prefix}.{self.name.lower()}.app"
