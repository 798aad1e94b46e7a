"""Data models for manifests and the processed plan."""

from dataclasses import dataclass
from typing import Literal

# Raw template file, or template plus a JSON values file
SourceMode = Literal["template", "template-json"]

SOURCE_MODES: tuple[SourceMode, ...] = ("template", "template-json")

# The only category whose conflicts may be resolved by appending
PROJECT_MEMORY_CATEGORY = "project-memory"


@dataclass(frozen=True)
class FileDescriptor:
    """One template file mapped to one target path pattern."""

    source: str
    target: str
    values: str | None


@dataclass(frozen=True)
class DirectoryDescriptor:
    """Every file under a template directory, mapped below a target directory."""

    source_dir: str
    target_dir: str


ArtifactDescriptor = FileDescriptor | DirectoryDescriptor


@dataclass(frozen=True)
class CategoryEntry:
    """A group of artifacts sharing one overwrite policy."""

    category: str
    mode: SourceMode
    artifacts: tuple[ArtifactDescriptor, ...]


@dataclass(frozen=True)
class Manifest:
    """Parsed manifest: categories in declaration order."""

    version: int
    categories: tuple[CategoryEntry, ...]


@dataclass(frozen=True)
class ProcessedArtifact:
    """An artifact with every placeholder resolved.

    ``source`` and ``values`` are relative to the templates root. ``target``
    is relative to the working directory, or absolute for global installs.
    """

    category: str
    source_mode: SourceMode
    source: str
    target: str
    values: str | None
