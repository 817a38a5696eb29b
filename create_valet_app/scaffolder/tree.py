"""Immutable in-memory project trees.

A ``ProjectTree`` maps POSIX relative paths to file content (``str`` for
UTF-8 text, ``bytes`` for anything else).  Every stage of the composition
engine takes a tree and returns a new one, so stages can be exercised without
touching the filesystem.  Only :meth:`ProjectTree.from_directory` and
:func:`write_tree` perform I/O.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import Path, PurePosixPath
from types import MappingProxyType
from typing import Union

Content = Union[str, bytes]

SOURCE_SUFFIXES: tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx")


def _norm(path: str | PurePosixPath) -> str:
    norm = PurePosixPath(str(path).replace("\\", "/"))
    if norm.is_absolute() or ".." in norm.parts:
        raise ValueError(f"tree paths must be relative and stay inside the tree: {path}")
    return norm.as_posix()


class ProjectTree(Mapping[str, Content]):
    """Read-only mapping of relative path -> content."""

    __slots__ = ("_files",)

    def __init__(self, files: Mapping[str, Content] | None = None) -> None:
        normalised = {_norm(p): c for p, c in (files or {}).items()}
        self._files = MappingProxyType(dict(sorted(normalised.items())))

    # -- Mapping protocol --------------------------------------------------

    def __getitem__(self, path: str) -> Content:
        return self._files[_norm(path)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        return _norm(path) in self._files

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ProjectTree):
            return dict(self._files) == dict(other._files)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._files.items()))

    def __repr__(self) -> str:
        return f"ProjectTree({len(self)} files)"

    # -- Derivation --------------------------------------------------------

    def with_file(self, path: str, content: Content) -> "ProjectTree":
        """Return a copy with *path* set to *content*."""
        files = dict(self._files)
        files[_norm(path)] = content
        return ProjectTree(files)

    def with_files(self, updates: Mapping[str, Content]) -> "ProjectTree":
        """Return a copy with every entry of *updates* written."""
        if not updates:
            return self
        files = dict(self._files)
        for path, content in updates.items():
            files[_norm(path)] = content
        return ProjectTree(files)

    def without(self, path: str) -> "ProjectTree":
        """Return a copy without *path*.  Absent paths are not an error."""
        key = _norm(path)
        if key not in self._files:
            return self
        return ProjectTree({p: c for p, c in self._files.items() if p != key})

    def without_dir(self, directory: str) -> "ProjectTree":
        """Return a copy with *directory* removed recursively.

        Absent directories are not an error.
        """
        prefix = _norm(directory).rstrip("/") + "/"
        if not self.has_dir(directory):
            return self
        return ProjectTree(
            {p: c for p, c in self._files.items() if not p.startswith(prefix)}
        )

    # -- Queries -----------------------------------------------------------

    def has_dir(self, directory: str) -> bool:
        """Return ``True`` if any file lives under *directory*."""
        prefix = _norm(directory).rstrip("/") + "/"
        return any(p.startswith(prefix) for p in self._files)

    def read_text(self, path: str) -> str:
        """Return the text content of *path*.

        Raises:
            KeyError: If *path* is not in the tree.
            UnicodeDecodeError: If the content is binary and not UTF-8.
        """
        content = self[path]
        if isinstance(content, bytes):
            return content.decode("utf-8")
        return content

    def source_files(
        self,
        root: str = "src",
        suffixes: tuple[str, ...] = SOURCE_SUFFIXES,
    ) -> Iterator[tuple[str, str]]:
        """Yield ``(path, text)`` for text sources under *root*."""
        prefix = _norm(root).rstrip("/") + "/"
        for path, content in self._files.items():
            if not path.startswith(prefix) or not isinstance(content, str):
                continue
            if PurePosixPath(path).suffix in suffixes:
                yield path, content

    # -- I/O ---------------------------------------------------------------

    @classmethod
    def from_directory(cls, root: str | Path) -> "ProjectTree":
        """Load every file under *root* into a tree.

        Files decodable as UTF-8 are stored as ``str``; others as ``bytes``.
        """
        base = Path(root)
        files: dict[str, Content] = {}
        for file_path in sorted(base.rglob("*")):
            if not file_path.is_file():
                continue
            rel = file_path.relative_to(base).as_posix()
            raw = file_path.read_bytes()
            try:
                files[rel] = raw.decode("utf-8")
            except UnicodeDecodeError:
                files[rel] = raw
        return cls(files)


def write_tree(tree: ProjectTree, target: str | Path) -> list[Path]:
    """Write every file of *tree* under *target*.

    Parent directories are created as needed.  Text is written byte-for-byte
    (no newline translation).  Returns the written paths in tree order.
    """
    base = Path(target)
    written: list[Path] = []
    for rel, content in tree.items():
        out = base / rel
        out.parent.mkdir(parents=True, exist_ok=True)
        data = content.encode("utf-8") if isinstance(content, str) else content
        out.write_bytes(data)
        written.append(out)
    return written
