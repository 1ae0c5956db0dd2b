"""
Git status lookup for the details Git column.

The cache is filled once per invocation by running ``git status`` for each
repository touched by the listed paths, then queried read-only while rows
are rendered.
"""
import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from enum import Enum

LOGGER = logging.getLogger(__name__)


class GitStatus(str, Enum):
    """State of one side (index or worktree) of a path."""

    NOT_MODIFIED = "-"
    NEW = "N"
    MODIFIED = "M"
    DELETED = "D"
    RENAMED = "R"
    TYPECHANGE = "T"
    IGNORED = "I"
    CONFLICTED = "U"


# Order used when several statuses below a directory are folded into one.
_DIRECTORY_PRIORITY = (
    GitStatus.CONFLICTED,
    GitStatus.DELETED,
    GitStatus.MODIFIED,
    GitStatus.RENAMED,
    GitStatus.TYPECHANGE,
    GitStatus.NEW,
    GitStatus.IGNORED,
)

_PORCELAIN_CODES = {
    ' ': GitStatus.NOT_MODIFIED,
    'M': GitStatus.MODIFIED,
    'A': GitStatus.NEW,
    'C': GitStatus.NEW,
    'D': GitStatus.DELETED,
    'R': GitStatus.RENAMED,
    'T': GitStatus.TYPECHANGE,
    'U': GitStatus.CONFLICTED,
}


@dataclass(frozen=True)
class FileGitStatus:
    """Index (staged) and worktree (unstaged) status of one path."""

    staged: GitStatus = GitStatus.NOT_MODIFIED
    unstaged: GitStatus = GitStatus.NOT_MODIFIED


UNCHANGED = FileGitStatus()


def _normalise(path):
    """Absolute path with the parent resolved, the final component kept."""
    path = os.path.abspath(path)
    head, tail = os.path.split(path)
    if not tail:
        return os.path.realpath(path)
    return os.path.join(os.path.realpath(head), tail)


def parse_porcelain(output, root):
    """Parse ``git status --porcelain=v1 -z`` output into a status mapping."""
    statuses = {}
    tokens = output.split('\0')
    idx = 0
    while idx < len(tokens):
        token = tokens[idx]
        idx += 1
        if len(token) < 4:
            continue
        code, rel_path = token[:2], token[3:]
        if code[0] in 'RC':
            # Renames and copies are followed by the source path.
            idx += 1
        if code == '??':
            status = FileGitStatus(GitStatus.NOT_MODIFIED, GitStatus.NEW)
        elif code == '!!':
            status = FileGitStatus(GitStatus.NOT_MODIFIED, GitStatus.IGNORED)
        elif 'U' in code or code in ('AA', 'DD'):
            status = FileGitStatus(GitStatus.CONFLICTED, GitStatus.CONFLICTED)
        else:
            status = FileGitStatus(
                _PORCELAIN_CODES.get(code[0], GitStatus.NOT_MODIFIED),
                _PORCELAIN_CODES.get(code[1], GitStatus.NOT_MODIFIED),
            )
        full_path = os.path.normpath(os.path.join(root, rel_path.rstrip('/')))
        statuses[full_path] = status
    return statuses


class GitCache:
    """Statuses of every changed path in the repositories being listed."""

    def __init__(self, statuses=None):
        self.statuses = dict(statuses or {})

    def __len__(self):
        return len(self.statuses)

    def _under(self, path):
        prefix = path.rstrip(os.sep) + os.sep
        for candidate, status in self.statuses.items():
            if candidate == path or candidate.startswith(prefix):
                yield status

    def has_anything_for(self, path):
        """Return True when *path* or anything beneath it has a status."""
        return any(True for _ in self._under(_normalise(path)))

    def status_for(self, path, is_dir=False):
        """Return the FileGitStatus for *path*.

        Directories report the most significant status found beneath them.
        """
        path = _normalise(path)
        if not is_dir:
            return self.statuses.get(path, UNCHANGED)
        found = list(self._under(path))
        if not found:
            return UNCHANGED
        return FileGitStatus(
            _fold([status.staged for status in found]),
            _fold([status.unstaged for status in found]),
        )

    @classmethod
    def discover(cls, paths):
        """Build a cache for the repositories containing *paths*.

        Any failure to run git yields an empty cache; the listing carries on
        without Git information.
        """
        git = shutil.which('git')
        if not git:
            LOGGER.debug('git not available on PATH')
            return cls()

        roots = []
        for path in paths:
            directory = path if os.path.isdir(path) else (os.path.dirname(path) or '.')
            root = _repository_root(git, directory)
            if root and root not in roots:
                roots.append(root)

        statuses = {}
        for root in roots:
            statuses.update(_repository_statuses(git, root))
        return cls(statuses)


def _fold(statuses):
    for candidate in _DIRECTORY_PRIORITY:
        if candidate in statuses:
            return candidate
    return GitStatus.NOT_MODIFIED


def _repository_root(git, directory):
    try:
        result = subprocess.run(
            [git, '-C', directory, 'rev-parse', '--show-toplevel'],
            capture_output=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        LOGGER.debug('No git repository for %s: %s', directory, exc)
        return None
    # Decoded the way os.listdir decodes names.
    root = os.fsdecode(result.stdout).strip()
    return os.path.realpath(root) if root else None


def _repository_statuses(git, root):
    try:
        result = subprocess.run(
            [
                git, '-C', root, 'status', '--porcelain=v1', '-z',
                '--untracked-files=all', '--ignored=matching',
            ],
            capture_output=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        LOGGER.debug('git status failed in %s: %s', root, exc)
        return {}
    statuses = parse_porcelain(os.fsdecode(result.stdout), root)
    LOGGER.debug('git status for %s: %d changed paths', root, len(statuses))
    return statuses
