"""Reading the mount table of a process from ``/proc/<pid>/mountinfo``."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass
class MountInfo:
    """One mounted filesystem as described by a mountinfo line."""

    id: int = 0
    parent: int = 0
    major: int = 0
    minor: int = 0
    root: str = ""
    mountpoint: str = ""
    opts: str = ""
    optional: str = ""
    fstype: str = ""
    source: str = ""
    vfs_opts: str = ""


def _parse_line(text: str) -> MountInfo:
    # Format: id parent major:minor root mountpoint opts [optional...] - fstype source vfsopts
    fields = text.split()
    try:
        mount_id = int(fields[0])
        parent = int(fields[1])
        major_text, colon, minor_text = fields[2].partition(":")
        if not colon:
            raise ValueError("expected major:minor")
        major, minor = int(major_text), int(minor_text)
        root, mountpoint, opts, first_optional = fields[3:7]
    except (IndexError, ValueError) as exc:
        raise ValueError(f"Scanning '{text}' failed: {exc}") from exc

    # Mount points with spaces are encoded as \040, so " - " is unambiguous.
    index = text.find(" - ")
    if index < 0:
        raise ValueError(f"no ' - ' separator in {text!r}")
    post = text[index + 3:].split(" ")
    if len(post) < 3:
        raise ValueError(f"Error found less than 3 fields post '-' in {text!r}")

    return MountInfo(
        id=mount_id,
        parent=parent,
        major=major,
        minor=minor,
        root=root,
        mountpoint=mountpoint,
        opts=opts,
        optional="" if first_optional == "-" else first_optional,
        fstype=post[0],
        source=post[1],
        vfs_opts=" ".join(post[2:]),
    )


def parse_mountinfo(lines: Iterable[str]) -> list[MountInfo]:
    """Parse mountinfo lines into :class:`MountInfo` records.

    Raises :class:`ValueError` for a malformed line.
    """
    return [_parse_line(line.rstrip("\r\n")) for line in lines]


def _read_mountinfo(path: str) -> list[MountInfo]:
    with open(path, encoding="utf-8", errors="surrogateescape") as handle:
        return parse_mountinfo(handle)


def _current_platform() -> str:
    if sys.platform.startswith("linux"):
        return "linux"
    if sys.platform.startswith("win"):
        return "windows"
    return sys.platform


def get_mounts(platform: str | None = None) -> list[MountInfo]:
    """Return the mounts of the current process.

    On Windows there is no mount table and the result is empty; platforms
    other than Linux and Windows raise :class:`OSError`.
    """
    platform = platform or _current_platform()
    if platform == "linux":
        return _read_mountinfo("/proc/self/mountinfo")
    if platform == "windows":
        return []
    raise OSError(f"reading the mount table is unsupported on {platform}")


def pid_mount_info(pid: int, proc_root: str = "/proc") -> list[MountInfo]:
    """Return the mounts seen by process ``pid``."""
    return _read_mountinfo(os.path.join(proc_root, str(pid), "mountinfo"))