"""Locating the cgroup hierarchy of the current process."""

from __future__ import annotations

import os
import posixpath

from ocitools.cgroup_v1 import CgroupV1
from ocitools.cgroupfs import CgroupError
from ocitools.paths import clean


def find_cgroup(mountinfo_path: str | os.PathLike[str] = "/proc/self/mountinfo") -> CgroupV1:
    """Return the cgroup v1 hierarchy named by the first cgroup mount.

    Raises :class:`CgroupError` when only cgroup v2 is mounted, when no
    cgroup is mounted, or when a line cannot be read.
    """
    found_v2 = False
    with open(mountinfo_path, encoding="utf-8", errors="surrogateescape") as handle:
        for raw in handle:
            text = raw.rstrip("\r\n")
            if not text:
                continue
            fields = text.split(" ")
            # Mount points with spaces are encoded as \040, so " - " is unambiguous.
            index = text.find(" - ")
            if index < 0:
                raise CgroupError(f"Found no fields post '-' in {text!r}")
            post = text[index + 3:].split(" ")
            fstype = post[0]
            if fstype == "cgroup":
                if len(fields) < 5:
                    raise CgroupError(f"Found no mount point in {text!r}")
                return CgroupV1(mount_path=clean("linux", posixpath.dirname(fields[4])))
            if fstype == "cgroup2":
                found_v2 = True

    if found_v2:
        raise CgroupError("cgroupv2 is not supported yet")
    raise CgroupError("cgroup is not found")