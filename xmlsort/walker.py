"""TreeWalker — apply the canonicalizer to documents, files and directory trees.

Each file is read, canonicalized and written back in place on its own; the
first failure aborts the run and files already rewritten stay rewritten.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from xmlsort.canonicalizer import canonicalize
from xmlsort.config import Settings
from xmlsort.document_io import dump_document, parse_document, read_bytes, write_bytes
from xmlsort.file_scanner import iter_matching_files
from xmlsort.models import Document

logger = logging.getLogger(__name__)


@dataclass
class FileResult:
    """Outcome of rewriting a single file."""

    path: Path
    changed: bool

    def summary(self) -> str:
        state = "sorted" if self.changed else "unchanged"
        return f"{self.path}: {state}"


class TreeWalker:
    """Drives canonicalization over documents and directory trees."""

    def __init__(self, ignored_names: Iterable[str] = (), settings: Settings | None = None):
        self.ignored_names = frozenset(name for name in ignored_names if name)
        self.settings = settings or Settings()

    def process_document(self, document: Document) -> Document:
        """Canonicalize a document's root and reassemble it with its prolog."""
        root = canonicalize(document.root, self.ignored_names)
        return Document(
            root=root,
            declaration=document.declaration,
            doctype=document.doctype,
            encoding=document.encoding,
        )

    def process_file(self, path: str | Path) -> FileResult:
        """Rewrite one file in place with its canonical form."""
        path = Path(path)
        logger.debug("Processing %s", path)

        raw = read_bytes(path)
        document = parse_document(raw, source=str(path), ignored_names=self.ignored_names)
        document = self.process_document(document)
        data = dump_document(
            document,
            indent=self.settings.indent,
            newline=self.settings.newline,
            ignored_names=self.ignored_names,
        )
        write_bytes(path, data)

        result = FileResult(path=path, changed=data != raw)
        if result.changed:
            logger.info("Rewrote %s", path)
        return result

    def process_tree(
        self, root: str | Path, extensions: Iterable[str] | None = None
    ) -> list[FileResult]:
        """Rewrite every file under ``root`` whose extension is in ``extensions``.

        Uses the configured extensions when none are given.
        """
        if extensions is None:
            extensions = self.settings.extensions
        return [self.process_file(path) for path in iter_matching_files(root, extensions)]
