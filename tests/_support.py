"""Shared test helpers.

These helpers avoid writing outside the repo (sandbox restriction) and build
file records without touching the filesystem.
"""

from __future__ import annotations

import shutil
import stat
import uuid
from datetime import datetime
from pathlib import Path

from lsgrid.core.files import KIND_DIR, KIND_FILE, KIND_LINK, FileRecord
from lsgrid.core.git import UNCHANGED
from lsgrid.core.table import TableOptions

# Only the permissions column: every rendered row is 11 columns wide
# (".rw-r--r-- " including the separator) plus the name.
PERMISSIONS_ONLY = TableOptions(user=False, size=False, modified=False)
PERMISSIONS_WIDTH = 11


class RepoTemporaryDirectory:
    """Minimal TemporaryDirectory-like helper that stays inside the repo."""

    def __init__(self, path: Path):
        self._path = path
        self.name = str(path)

    def cleanup(self) -> None:
        shutil.rmtree(self._path, ignore_errors=True)

    def __enter__(self) -> str:
        return self.name

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.cleanup()
        return False


def make_repo_tmpdir(prefix: str = "_tmp_") -> RepoTemporaryDirectory:
    """Create a temp directory under tests/ (ignored by git).

    The sandbox only allows writes inside the workspace, so using the system temp
    directory (e.g. %TEMP%) can fail with PermissionError.
    """

    tests_dir = Path(__file__).resolve().parent
    for _ in range(100):
        path = tests_dir / f"{prefix}{uuid.uuid4().hex[:12]}"
        try:
            path.mkdir()
        except FileExistsError:
            continue
        return RepoTemporaryDirectory(path)

    raise RuntimeError("failed to create a repo temp directory")


def make_file(name, *, kind=KIND_FILE, size=0, mode=None, nlink=1, user="", uid=0,
              modified=0.0, link_target=None, link_broken=False,
              directory="/listing") -> FileRecord:
    """Return a FileRecord for a file that need not exist."""
    if mode is None:
        if kind == KIND_DIR:
            mode = stat.S_IFDIR | 0o755
        elif kind == KIND_LINK:
            mode = stat.S_IFLNK | 0o777
        else:
            mode = stat.S_IFREG | 0o644
    return FileRecord(
        name=name,
        path=f"{directory}/{name}",
        kind=kind,
        size=size,
        mode=mode,
        nlink=nlink,
        uid=uid,
        user=user,
        modified=modified,
        link_target=link_target,
        link_broken=link_broken,
    )


def make_files(count, width=3, prefix="f"):
    """Return *count* files whose names are all *width* columns wide."""
    digits = width - len(prefix)
    return [make_file(f"{prefix}{idx:0{digits}d}") for idx in range(count)]


def local_timestamp(*args) -> float:
    """Epoch seconds for a local date and time."""
    return datetime(*args).timestamp()


class FakeGit:
    """GitCache stand-in that reports status for a fixed set of paths."""

    def __init__(self, paths=(), statuses=None):
        self.paths = set(paths)
        self.statuses = dict(statuses or {})
        self.queries = []

    def has_anything_for(self, path):
        self.queries.append(path)
        prefix = path.rstrip("/") + "/"
        return any(p == path or p.startswith(prefix) for p in self.paths | set(self.statuses))

    def status_for(self, path, is_dir=False):
        return self.statuses.get(path, UNCHANGED)
