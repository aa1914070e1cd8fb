"""Path handling for an explicitly named target operating system.

Tools running on one system can use these functions to reason about
paths meant for another, for example a Linux host deciding whether a
path is absolute on Windows.
"""

from __future__ import annotations

import re

_WINDOWS_ABS = re.compile(r"[a-zA-Z]:\\.*")


def separator(os_name: str) -> str:
    """Return the path separator used by ``os_name``."""
    return "\\" if os_name == "windows" else "/"


def is_abs(os_name: str, path: str) -> bool:
    """Report whether ``path`` is absolute on ``os_name``.

    On POSIX systems a leading ``//`` also counts as absolute.
    """
    if os_name == "windows":
        return _WINDOWS_ABS.fullmatch(path) is not None
    return path.startswith(separator(os_name))


def _clean_once(os_name: str, path: str) -> str:
    absolute = is_abs(os_name, path)
    sep = separator(os_name)
    windows_style = sep == "\\"

    parts = [part for part in path.split(sep) if part]

    # Drop "." elements, keeping a single one if nothing else remains.
    without_dots = [part for part in parts if part != "."]
    if parts and not without_dots:
        without_dots = ["."]

    # Each ".." cancels the element before it; a leading ".." stays, and
    # the drive of an absolute Windows path is never consumed.
    stack: list[str] = []
    for part in without_dots:
        protected = len(stack) == 1 and absolute and windows_style
        if part == ".." and stack and not protected:
            stack.pop()
        else:
            stack.append(part)

    # A rooted path cannot climb above its root.
    if absolute:
        offset = 1 if windows_style else 0
        while len(stack) > offset and stack[offset] == "..":
            del stack[offset]

    cleaned = sep.join(stack)
    if absolute:
        if not windows_style:
            cleaned = sep + cleaned
        elif len(stack) == 1:
            cleaned += sep
    return cleaned or "."


def clean(os_name: str, path: str) -> str:
    """Return the shortest path equivalent to ``path`` on ``os_name``."""
    while True:
        cleaned = _clean_once(os_name, path)
        if cleaned == path:
            return path
        path = cleaned


def join(os_name: str, *args: str) -> str:
    """Join path elements with the separator of ``os_name`` and clean the result."""
    return clean(os_name, separator(os_name).join(args))


def abs_path(os_name: str, path: str, cwd: str) -> str:
    """Return ``path`` made absolute against ``cwd`` on ``os_name``."""
    if is_abs(os_name, path):
        return clean(os_name, path)
    return clean(os_name, join(os_name, cwd, path))