"""Map file paths to depth-limited directory keys."""

ROOT_KEY = "."


def dir_key(path: str, depth: int) -> str:
    """Directory key of ``path`` using at most ``depth`` leading directories.

    Only normal components count: empty, ``.`` and ``..`` segments and any
    root or drive prefix are ignored.  Files at the repository root, and any
    path when ``depth <= 0``, map to ``"."``.

    >>> dir_key("src/core/engine/run.py", 2)
    'src/core'
    >>> dir_key("README.md", 3)
    '.'
    """
    parts = [p for p in path.replace("\\", "/").split("/") if p not in ("", ".", "..")]
    if parts and parts[0].endswith(":"):
        parts = parts[1:]
    # drop the filename
    parts = parts[:-1]
    keep = min(depth, len(parts))
    if keep <= 0:
        return ROOT_KEY
    return "/".join(parts[:keep])
