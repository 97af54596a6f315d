"""Writing rendered text below the site's destination directory.

Each document is written to a temporary file next to its target and moved
into place, so readers see either the previous file or the complete new one.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from .errors import OutputPathError


class OutputWriter:
    """Writes rendered documents to ``destination / url``.

    Attributes:
        destination: Root directory of the generated site
    """

    def __init__(self, destination: str | Path):
        self.destination = Path(destination)

    def path_for(self, url: str) -> Path:
        """Map ``url`` to a file below the destination.

        Raises:
            OutputPathError: If ``url`` resolves outside the destination
        """
        root = self.destination.resolve()
        path = (root / url.lstrip("/")).resolve()
        if path == root or root not in path.parents:
            raise OutputPathError(url, str(self.destination))
        return path

    def write(self, url: str, text: str) -> Path:
        """Write ``text`` for ``url`` and return the file path."""
        path = self.path_for(url)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=path.parent, prefix=f".{path.name}.", delete=False
            ) as handle:
                tmp_path = Path(handle.name)
                handle.write(text)
            os.replace(tmp_path, path)
        except BaseException:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise
        return path
