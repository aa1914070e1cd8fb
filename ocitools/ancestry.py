"""Ancestor relations between paths of an explicitly named operating system."""

from __future__ import annotations

from ocitools.paths import abs_path, separator


def is_ancestor(os_name: str, path_a: str, path_b: str, cwd: str) -> bool:
    """Report whether ``path_a`` is a strict ancestor of ``path_b``.

    Equal paths are not ancestors of each other. Relative paths are made
    absolute against ``cwd``.
    """
    if path_a == path_b:
        return False
    path_a = abs_path(os_name, path_a, cwd)
    path_b = abs_path(os_name, path_b, cwd)
    sep = separator(os_name)
    if not path_a.endswith(sep):
        path_a += sep
    if path_a == path_b:
        return False
    return path_b.startswith(path_a)