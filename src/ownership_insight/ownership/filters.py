"""Decide which paths take part in scoring."""

from __future__ import annotations

import posixpath
from typing import AbstractSet, Optional

from .models import ScanOptions

# Common source, config and doc extensions.  Callers extend this through
# ScanOptions.extra_extensions or replace it via the ``extensions`` setting.
DEFAULT_EXTENSIONS: frozenset[str] = frozenset(
    {
        "rs", "ts", "tsx", "js", "jsx", "java", "kt", "kts", "go", "py", "rb",
        "swift", "c", "h", "cpp", "hpp", "cc", "hh", "cs", "php", "scala", "m",
        "mm", "sh", "bash", "zsh", "fish", "sql", "xml", "yml", "yaml", "toml",
        "json", "lock", "lua", "vim", "conf", "ini", "cfg", "md", "txt",
    }
)


def extension_of(path: str) -> Optional[str]:
    """Lowercase extension of the final path component, without the dot.

    Dotfiles such as ``.gitignore`` have no extension.
    """
    name = posixpath.basename(path.replace("\\", "/"))
    _, ext = posixpath.splitext(name)
    if not ext or ext == ".":
        return None
    return ext[1:].lower()


def is_included(
    path: str, options: ScanOptions, allowed: AbstractSet[str] = DEFAULT_EXTENSIONS
) -> bool:
    if options.include_all:
        return True
    ext = extension_of(path)
    if ext is None:
        return False
    return ext in allowed or ext in options.extra_extensions
