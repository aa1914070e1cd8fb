"""Helpers for reading cgroup v1 hierarchies and process cgroup membership."""

from __future__ import annotations

import os
import re


class CgroupError(Exception):
    """A cgroup could not be located or read as expected."""


class CgroupPathError(CgroupError):
    """A cgroup path requirement of the runtime specification was violated.

    ``code`` names the violated requirement.
    """

    ABS_PATH_REL_TO_MOUNT = "CgroupsAbsPathRelToMount"
    PATH_ATTACH = "CgroupsPathAttach"

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


_SIGNED = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"[0-9]+")


def _parse_int(text: str, *, bits: int = 64, signed: bool = True) -> int:
    """Parse a base-10 integer that must fit in ``bits`` bits."""
    pattern = _SIGNED if signed else _UNSIGNED
    if pattern.fullmatch(text) is None:
        raise ValueError(f"invalid syntax: {text!r}")
    value = int(text)
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1
    if not low <= value <= high:
        raise ValueError(f"value out of range: {text!r}")
    return value


def get_subsystem_path(pid: int, subsystem: str, proc_root: str = "/proc") -> str:
    """Return the cgroup path of ``pid`` within ``subsystem``.

    Raises :class:`CgroupError` if the process is not in that subsystem.
    """
    with open(os.path.join(proc_root, str(pid), "cgroup"), encoding="utf-8") as handle:
        contents = handle.read()

    for line in contents.strip().split("\n"):
        parts = line.split(":", 2)
        if len(parts) < 3:
            continue
        if subsystem in parts[1].split(","):
            return parts[2]

    raise CgroupError(f"subsystem {subsystem} not found")


def parse_device_id(device_id: str) -> tuple[int, int]:
    """Split a ``major:minor`` device identifier into two integers."""
    parts = device_id.split(":")
    if len(parts) < 2:
        raise ValueError(f"invalid device id: {device_id!r}")
    return _parse_int(parts[0]), _parse_int(parts[1])


_SIZE = re.compile(r"([0-9]+(\.[0-9]+)*) ?([kKmMgGtTpP])?[bB]?")
_BINARY_MULTIPLIERS = {
    "k": 1024,
    "m": 1024**2,
    "g": 1024**3,
    "t": 1024**4,
    "p": 1024**5,
}


def in_bytes(size: str) -> int:
    """Convert a human readable size such as ``2048kB`` to bytes (binary units)."""
    match = _SIZE.fullmatch(size)
    if match is None:
        raise ValueError(f"invalid size: '{size}'")
    byte_size = float(match.group(1))
    unit = (match.group(3) or "").lower()
    if unit:
        byte_size *= _BINARY_MULTIPLIERS[unit]
    return int(byte_size)


_UNITS = ("B", "kB", "MB", "GB", "TB", "PB")


def format_page_size(size: int) -> str:
    """Format a byte count the way hugetlb control files name page sizes."""
    value = float(size)
    index = 0
    while value >= 1024 and index < len(_UNITS) - 1:
        value /= 1024
        index += 1
    text = str(int(value)) if value.is_integer() else repr(value)
    return f"{text}{_UNITS[index]}"


def hugepage_sizes(sysfs_dir: str = "/sys/kernel/mm/hugepages") -> list[str]:
    """Return the hugepage sizes the kernel offers, named as in hugetlb files."""
    sizes = []
    for name in sorted(os.listdir(sysfs_dir)):
        parts = name.split("-")
        if len(parts) < 2:
            raise ValueError(f"unexpected hugepage directory name: {name!r}")
        sizes.append(format_page_size(in_bytes(parts[1])))
    return sizes