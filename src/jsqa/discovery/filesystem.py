# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem discovery of JavaScript sources and the per-run file registry."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Mapping, Sequence
from pathlib import Path
from typing import Final

from jsqa.core.models import FileKind, SourceFile

JS_EXTENSIONS: Final[Mapping[str, FileKind]] = {
    ".js": FileKind.SCRIPT,
    ".cjs": FileKind.SCRIPT,
    ".mjs": FileKind.MODULE,
}
ALWAYS_EXCLUDE_DIRS: Final[frozenset[str]] = frozenset({"node_modules"})


class DiscoveryError(Exception):
    """Raised when a requested path cannot be resolved to files."""


class FileRegistry(Mapping[int, SourceFile]):
    """Read-only registry of the files taking part in a run."""

    def __init__(self, files: Iterable[SourceFile] = ()) -> None:
        self._files: dict[int, SourceFile] = {}
        for file in files:
            if file.file_id in self._files:
                raise ValueError(f"duplicate file id {file.file_id}")
            self._files[file.file_id] = file

    @classmethod
    def empty(cls) -> FileRegistry:
        """Return a registry without files, used for run-level diagnostics."""

        return cls()

    def __getitem__(self, file_id: int) -> SourceFile:
        return self._files[file_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    @property
    def files(self) -> tuple[SourceFile, ...]:
        """Return the registered files in discovery order."""

        return tuple(self._files.values())

    def line_column(self, file_id: int, offset: int) -> tuple[int, int]:
        """Return the one-based line and column of ``offset`` in a file.

        Offsets outside the source are clamped to its bounds.

        Args:
            file_id: Identifier of a registered file.
            offset: Character offset into the file source.

        Returns:
            tuple[int, int]: One-based ``(line, column)`` pair.

        Raises:
            KeyError: If ``file_id`` is not registered.
        """

        source = self._files[file_id].source
        offset = max(0, min(offset, len(source)))
        line = source.count("\n", 0, offset) + 1
        return line, offset - (source.rfind("\n", 0, offset) + 1) + 1

    def line_text(self, file_id: int, line: int) -> str:
        """Return the text of one-based ``line`` without its line ending.

        Lines past the end of the source yield an empty string.
        """

        source_lines = self._files[file_id].source.splitlines()
        return source_lines[line - 1] if 0 < line <= len(source_lines) else ""


def file_kind(path: Path) -> FileKind:
    """Return the parse goal implied by the extension of ``path``."""

    return JS_EXTENSIONS.get(path.suffix.lower(), FileKind.SCRIPT)


def _iter_directory(base: Path) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(base):
        dirnames[:] = sorted(
            name for name in dirnames if name not in ALWAYS_EXCLUDE_DIRS and not name.startswith(".")
        )
        for filename in sorted(filenames):
            candidate = Path(dirpath, filename)
            if candidate.suffix.lower() in JS_EXTENSIONS:
                yield candidate


def collect_files(paths: Sequence[str], *, root: Path | None = None) -> list[Path]:
    """Expand ``paths`` into an ordered, de-duplicated list of source files.

    Explicit file arguments are kept regardless of their extension; directories
    are walked recursively for known JavaScript extensions.

    Args:
        paths: File or directory arguments supplied on the command line.
        root: Base directory for relative paths; defaults to the working directory.

    Returns:
        list[Path]: Resolved file paths in argument order.

    Raises:
        DiscoveryError: If a path does not exist or cannot be resolved.
    """

    base = root or Path.cwd()
    collected: dict[Path, None] = {}
    for raw in paths:
        candidate = Path(raw)
        if not candidate.is_absolute():
            candidate = base / candidate
        try:
            if candidate.is_file():
                collected[candidate.resolve()] = None
            elif candidate.is_dir():
                collected.update(dict.fromkeys(path.resolve() for path in _iter_directory(candidate)))
            else:
                raise DiscoveryError(f"path `{raw}` does not exist")
        except (OSError, RuntimeError) as exc:  # RuntimeError covers symlink loops
            raise DiscoveryError(f"failed to resolve `{raw}`: {exc}") from exc
    return list(collected)


class FileWalker:
    """Load discovered files into a :class:`FileRegistry`."""

    def __init__(self, *, root: Path | None = None) -> None:
        self._root = root or Path.cwd()

    def _display_name(self, path: Path) -> str:
        try:
            return path.relative_to(self._root.resolve()).as_posix()
        except ValueError:
            return path.as_posix()

    def discover(self, paths: Sequence[str]) -> FileRegistry:
        """Return a registry holding every file matched by ``paths``.

        Args:
            paths: File or directory arguments.

        Returns:
            FileRegistry: Files with ids assigned in discovery order.

        Raises:
            DiscoveryError: If a path does not exist or a file cannot be read.
        """

        files: list[SourceFile] = []
        for file_id, path in enumerate(collect_files(paths, root=self._root)):
            try:
                source = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise DiscoveryError(f"failed to read `{self._display_name(path)}`: {exc}") from exc
            files.append(
                SourceFile(file_id=file_id, name=self._display_name(path), source=source, kind=file_kind(path))
            )
        return FileRegistry(files)

    __call__ = discover


__all__ = [
    "ALWAYS_EXCLUDE_DIRS",
    "DiscoveryError",
    "FileRegistry",
    "FileWalker",
    "JS_EXTENSIONS",
    "collect_files",
    "file_kind",
]
