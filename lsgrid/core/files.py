"""
File records, directory listing and sorting.
"""
import logging
import os
import stat
from dataclasses import dataclass
from typing import Optional

try:
    import pwd
except ImportError:
    pwd = None

LOGGER = logging.getLogger(__name__)

KIND_FILE = 'file'
KIND_DIR = 'dir'
KIND_LINK = 'link'
KIND_OTHER = 'other'


class LsgridError(Exception):
    """Base class for errors reported by lsgrid."""


class ListingError(LsgridError):
    """A path could not be read."""

    def __init__(self, path, error):
        super().__init__(f'{path}: {error.strerror or error}')
        self.path = path
        self.error = error


def _owner_name(uid):
    """Resolve uid to a displayable owner name."""
    if pwd is None:
        return str(uid)
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)


def _extension(name):
    """Lowercase text after the last dot, or None when there is no dot."""
    idx = name.rfind('.')
    if idx < 0 or idx == len(name) - 1:
        return None
    return name[idx + 1:].lower()


def _kind_for_mode(mode):
    if stat.S_ISLNK(mode):
        return KIND_LINK
    if stat.S_ISDIR(mode):
        return KIND_DIR
    if stat.S_ISREG(mode):
        return KIND_FILE
    return KIND_OTHER


@dataclass(frozen=True)
class FileRecord:
    """One entry to be rendered; read-only for the duration of a render."""

    name: str
    path: str
    kind: str = KIND_FILE
    size: int = 0
    mode: int = stat.S_IFREG | 0o644
    nlink: int = 1
    uid: int = 0
    user: str = ''
    modified: float = 0.0
    link_target: Optional[str] = None
    link_broken: bool = False

    @property
    def ext(self):
        return _extension(self.name)

    @property
    def is_dir(self):
        return self.kind == KIND_DIR

    @property
    def is_link(self):
        return self.kind == KIND_LINK

    @property
    def is_executable(self):
        return self.kind == KIND_FILE and bool(self.mode & 0o111)

    @classmethod
    def from_path(cls, path, name=None):
        """Build a record from ``os.lstat``; raises OSError when it fails."""
        st = os.lstat(path)
        kind = _kind_for_mode(st.st_mode)
        link_target = None
        link_broken = False
        if kind == KIND_LINK:
            try:
                link_target = os.readlink(path)
            except OSError:
                link_target = ''
            link_broken = not os.path.exists(path)
        return cls(
            name=name if name is not None else (os.path.basename(os.path.normpath(path)) or path),
            path=os.path.abspath(path),
            kind=kind,
            size=st.st_size,
            mode=st.st_mode,
            nlink=st.st_nlink,
            uid=getattr(st, 'st_uid', 0),
            user=_owner_name(getattr(st, 'st_uid', 0)),
            modified=st.st_mtime,
            link_target=link_target,
            link_broken=link_broken,
        )


def list_directory(path, show_hidden=False):
    """Return records for the entries of directory *path*.

    Entries that vanish or cannot be stat'ed while listing are skipped.
    """
    try:
        names = os.listdir(path)
    except OSError as exc:
        raise ListingError(path, exc) from exc

    records = []
    for name in names:
        if not show_hidden and name.startswith('.'):
            continue
        try:
            records.append(FileRecord.from_path(os.path.join(path, name), name=name))
        except OSError as exc:
            LOGGER.warning('Skipping %s: %s', os.path.join(path, name), exc)
    return records


def _name_key(record):
    return (record.name.lower(), record.name)


SORT_KEYS = {
    'name': _name_key,
    'size': lambda record: (record.size, _name_key(record)),
    'modified': lambda record: (record.modified, _name_key(record)),
    'extension': lambda record: (record.ext or '', _name_key(record)),
}


def sort_files(records, field='name', reverse=False, dirs_first=False):
    """Return *records* ordered by *field*; ``'none'`` keeps listing order."""
    ordered = list(records)
    key = SORT_KEYS.get(field)
    if key is not None:
        ordered.sort(key=key, reverse=reverse)
    elif reverse:
        ordered.reverse()
    if dirs_first:
        ordered.sort(key=lambda record: not record.is_dir)
    return ordered
