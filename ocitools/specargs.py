"""Parsers for the colon and equals separated values given to the spec generator."""

from __future__ import annotations

import re

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def _atoi(text: str) -> int:
    """Parse a base-10 integer in the range of a 64-bit signed int."""
    if _INTEGER.fullmatch(text) is None:
        raise ValueError(f"invalid syntax: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"value out of range: {text!r}")
    return value


def _unsigned(value: int, bits: int) -> int:
    return value & ((1 << bits) - 1)


def _signed(value: int, bits: int) -> int:
    value = _unsigned(value, bits)
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def parse_console_size(console_size: str) -> tuple[int, int]:
    """Parse ``width:height``."""
    parts = console_size.split(":")
    if len(parts) != 2:
        raise ValueError(f"invalid consolesize value: {console_size}")
    return _unsigned(_atoi(parts[0]), 64), _unsigned(_atoi(parts[1]), 64)


def parse_id_mapping(mapping: str) -> tuple[int, int, int]:
    """Parse ``hostID:containerID:size``."""
    parts = mapping.split(":")
    if len(parts) != 3:
        raise ValueError(f"idmappings error: {mapping}")
    host_id, container_id, size = (_unsigned(_atoi(part), 32) for part in parts)
    return host_id, container_id, size


def parse_hugepage_limit(page_limit: str) -> tuple[str, int]:
    """Parse ``pagesize:limit``."""
    parts = page_limit.split(":")
    if len(parts) != 2:
        raise ValueError(f"invalid format: {page_limit}")
    return parts[0], _unsigned(_atoi(parts[1]), 64)


def parse_network_priority(priority: str) -> tuple[str, int]:
    """Parse ``interface:priority``; a priority of -1 asks for removal."""
    parts = priority.split(":")
    if len(parts) != 2 or not parts[0]:
        raise ValueError(f"invalid value {priority} for --linux-network-priorities")
    return parts[0], _signed(_atoi(parts[1]), 32)


def parse_rlimit(rlimit: str) -> tuple[str, int, int]:
    """Parse ``type:hard:soft``."""
    parts = rlimit.split(":")
    if len(parts) != 3 or not parts[0]:
        raise ValueError(f"invalid rlimits value: {rlimit}")
    return parts[0], _unsigned(_atoi(parts[1]), 64), _unsigned(_atoi(parts[2]), 64)


def parse_namespace(namespace: str) -> tuple[str, str]:
    """Parse ``type[:path]``; the path is empty when not given."""
    ns_type, _, ns_path = namespace.partition(":")
    if not ns_type:
        raise ValueError(f"invalid namespace value: {namespace}")
    return ns_type, ns_path


def parse_windows_device(device: str) -> tuple[str, str]:
    """Parse ``id:idType``."""
    parts = device.split(":")
    if len(parts) != 2:
        raise ValueError(f"invalid windows device value: {device}")
    return parts[0], parts[1]


def parse_label(label: str) -> tuple[str, str]:
    """Parse an annotation ``key=value``; the value may contain ``=``."""
    key, sep, value = label.partition("=")
    if not sep or not key:
        raise ValueError(f"incorrectly specified annotation: {label}")
    return key, value


def parse_sysctl(sysctl: str) -> tuple[str, str]:
    """Parse ``key=value`` with exactly one ``=``."""
    parts = sysctl.split("=")
    if len(parts) != 2:
        raise ValueError(f"incorrectly specified sysctl: {sysctl}")
    return parts[0], parts[1]


def parse_device_weight(weight_device: str) -> tuple[int, int, int]:
    """Parse ``major:minor:weight``; a weight of -1 asks for removal."""
    parts = weight_device.split(":")
    if len(parts) != 3:
        raise ValueError(f"invalid format: {weight_device}")
    major, minor, weight = (_atoi(part) for part in parts)
    return major, minor, _signed(weight, 16)


def parse_throttle_device(throttle_device: str) -> tuple[int, int, int]:
    """Parse ``major:minor:rate``; a rate of -1 asks for removal."""
    parts = throttle_device.split(":")
    if len(parts) != 3:
        raise ValueError(f"invalid format: {throttle_device}")
    major, minor, rate = (_atoi(part) for part in parts)
    return major, minor, rate