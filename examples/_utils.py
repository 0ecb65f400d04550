"""Sample collaborators used by the runnable examples."""

from __future__ import annotations

import typing as t
from pathlib import Path

Callback = t.Callable[[Exception | None, t.Any], None]


class FileStore:
    """Tiny storage gateway the examples replace with doubles."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def listdir(self, path: str) -> list[str]:
        return sorted(p.name for p in (self.root / path).iterdir())

    def stat(self, path: str) -> int:
        return (self.root / path).stat().st_size

    def read(self, path: str, callback: Callback) -> None:
        """Read *path* and hand ``(error, text)`` to *callback*."""
        try:
            text = (self.root / path).read_text()
        except OSError as err:
            callback(err, None)
        else:
            callback(None, text)


def total_size(store: FileStore, path: str) -> int:
    """Return the summed size of the entries directly under *path*."""
    return sum(store.stat(f"{path}/{name}") for name in store.listdir(path))


def read_all(store: FileStore, paths: t.Iterable[str]) -> dict[str, str]:
    """Collect the text of every readable path, skipping failures."""
    contents: dict[str, str] = {}

    def collect(path: str) -> Callback:
        def callback(err: Exception | None, text: t.Any) -> None:
            if err is None:
                contents[path] = text

        return callback

    for path in paths:
        store.read(path, collect(path))
    return contents
