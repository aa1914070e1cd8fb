"""Parsers for the device and device access rule values given to the spec generator."""

from __future__ import annotations

from dataclasses import dataclass

from ocitools.cgroup_resources import DeviceCgroup
from ocitools.cgroupfs import _parse_int

_DEVICE_TYPES = frozenset({"b", "c", "u", "p"})
_CGROUP_DEVICE_TYPES = frozenset({"a", "b", "c"})
_CGROUP_DEVICE_ACCESS = frozenset({"r", "w", "m"})
_UINT32_MASK = 0xFFFFFFFF


@dataclass
class LinuxDevice:
    """A device node that must be made available in the container."""

    type: str
    path: str
    major: int
    minor: int
    file_mode: int | None = None
    uid: int | None = None
    gid: int | None = None


def _int32_as_uint32(text: str) -> int:
    return _parse_int(text, bits=32) & _UINT32_MASK


def parse_device(device: str) -> LinuxDevice:
    """Parse ``type:major:minor:path[:name=value...]``.

    The optional properties are ``fileMode``, ``uid`` and ``gid``.
    Raises :class:`ValueError` for a malformed value.
    """
    parts = device.split(":")
    if len(parts) < 4:
        raise ValueError(f"Incomplete device arguments: {device}")
    dev_type, major_text, minor_text, path = parts[:4]
    if dev_type not in _DEVICE_TYPES:
        raise ValueError(f"Invalid device type: {dev_type}")

    result = LinuxDevice(
        type=dev_type,
        path=path,
        major=_parse_int(major_text),
        minor=_parse_int(minor_text),
    )

    for option in parts[4:]:
        name, sep, value = option.partition("=")
        if not sep:
            raise ValueError(f"Incomplete device arguments: {option}")
        if name == "fileMode":
            result.file_mode = _int32_as_uint32(value)
        elif name == "uid":
            result.uid = _int32_as_uint32(value)
        elif name == "gid":
            result.gid = _int32_as_uint32(value)
        else:
            raise ValueError(f"'{name}' is not supported by device section")
    return result


def parse_device_cgroup_rule(rule: str) -> DeviceCgroup:
    """Parse ``allow|deny[,type=..][,major=..][,minor=..][,access=..]``.

    Unknown keys are ignored. Raises :class:`ValueError` for a malformed value.
    """
    fields = rule.split(",")
    if fields[0] == "allow":
        allow = True
    elif fields[0] == "deny":
        allow = False
    else:
        raise ValueError(
            "Only 'allow' and 'deny' are allowed in the first field of "
            f"device-access-add: {rule}"
        )

    result = DeviceCgroup(allow=allow)
    for field_text in fields[1:]:
        field_text = field_text.strip()
        if not field_text:
            continue
        name, sep, value = field_text.partition("=")
        if not sep:
            raise ValueError(f"Incomplete device-access-add arguments: {field_text}")
        if name == "type":
            if value not in _CGROUP_DEVICE_TYPES:
                raise ValueError(f"Invalid device type in device-access-add: {value}")
            result.type = value
        elif name == "major":
            result.major = _parse_int(value)
        elif name == "minor":
            result.minor = _parse_int(value)
        elif name == "access":
            for char in value:
                if char not in _CGROUP_DEVICE_ACCESS:
                    raise ValueError(f"Invalid device access in device-access-add: {char}")
            result.access = value
    return result