"""File scanner — find the files a directory run should rewrite."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from xmlsort.errors import DocumentIOError


def has_extension(path: Path, extensions: Iterable[str]) -> bool:
    """Check if a file name ends with ``.`` plus one of the extensions.

    Matching is literal and case-sensitive; ``"tar.gz"`` works as well as ``"xml"``.
    """
    return any(ext and path.name.endswith("." + ext) for ext in extensions)


def iter_matching_files(root: str | Path, extensions: Iterable[str]) -> Iterator[Path]:
    """Yield matching files directly under ``root``, then those of each subdirectory.

    Entries are visited in name order. Recursion follows the real directory
    depth with no limit.
    """
    root = Path(root)
    extensions = list(extensions)
    try:
        entries = sorted(root.iterdir())
    except OSError as e:
        raise DocumentIOError(root, e.strerror or str(e)) from e

    subdirs = []
    for entry in entries:
        if entry.is_dir():
            subdirs.append(entry)
        elif entry.is_file() and has_extension(entry, extensions):
            yield entry

    for subdir in subdirs:
        yield from iter_matching_files(subdir, extensions)
