"""Resource settings read back from a container's cgroups."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class WeightDevice:
    """Block IO weights for one device."""

    major: int
    minor: int
    weight: int | None = None
    leaf_weight: int | None = None


@dataclass
class ThrottleDevice:
    """A rate limit for one device."""

    major: int
    minor: int
    rate: int


@dataclass
class LinuxBlockIO:
    """Block IO controller settings."""

    weight: int | None = None
    leaf_weight: int | None = None
    weight_device: list[WeightDevice] = field(default_factory=list)
    throttle_read_bps_device: list[ThrottleDevice] = field(default_factory=list)
    throttle_write_bps_device: list[ThrottleDevice] = field(default_factory=list)
    throttle_read_iops_device: list[ThrottleDevice] = field(default_factory=list)
    throttle_write_iops_device: list[ThrottleDevice] = field(default_factory=list)

    def weight_device_for(self, major: int, minor: int) -> WeightDevice:
        """Return the weight entry for a device, appending a new one if absent."""
        for device in self.weight_device:
            if device.major == major and device.minor == minor:
                return device
        device = WeightDevice(major=major, minor=minor)
        self.weight_device.append(device)
        return device


@dataclass
class LinuxCPU:
    """CPU and cpuset controller settings."""

    shares: int | None = None
    quota: int | None = None
    period: int | None = None
    realtime_runtime: int | None = None
    realtime_period: int | None = None
    cpus: str = ""
    mems: str = ""


@dataclass
class DeviceCgroup:
    """One device access rule."""

    allow: bool = False
    type: str = ""
    major: int | None = None
    minor: int | None = None
    access: str = ""


@dataclass
class HugepageLimit:
    """The hugetlb limit for one page size."""

    pagesize: str
    limit: int


@dataclass
class LinuxMemory:
    """Memory controller settings."""

    limit: int | None = None
    reservation: int | None = None
    swap: int | None = None
    kernel: int | None = None
    kernel_tcp: int | None = None
    swappiness: int | None = None
    disable_oom_killer: bool | None = None


@dataclass
class InterfacePriority:
    """Network priority of one interface."""

    name: str
    priority: int


@dataclass
class LinuxNetwork:
    """net_cls and net_prio controller settings."""

    class_id: int | None = None
    priorities: list[InterfacePriority] = field(default_factory=list)


@dataclass
class LinuxPids:
    """pids controller settings."""

    limit: int