"""Reading a container's resource settings back from a cgroup v1 hierarchy."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass

from ocitools.cgroup_resources import (
    DeviceCgroup,
    HugepageLimit,
    InterfacePriority,
    LinuxBlockIO,
    LinuxCPU,
    LinuxMemory,
    LinuxNetwork,
    LinuxPids,
    ThrottleDevice,
    WeightDevice,
)
from ocitools.cgroupfs import (
    CgroupError,
    CgroupPathError,
    _parse_int,
    get_subsystem_path,
    hugepage_sizes,
    parse_device_id,
)
from ocitools.paths import is_abs, join

_ABS_MESSAGE = (
    "In the case of an absolute path, the runtime MUST take the path to be "
    "relative to the cgroups mount point"
)
_ATTACH_MESSAGE = (
    "The runtime MUST consistently attach to the same place in the cgroups "
    "hierarchy given the same value of `cgroupsPath`"
)


def _device_entries(contents: str) -> Iterator[tuple[int, int, str]]:
    for line in contents.strip().split("\n"):
        if not line:
            continue
        fields = line.split(" ")
        if len(fields) < 2:
            raise ValueError(f"malformed device entry: {line!r}")
        major, minor = parse_device_id(fields[0])
        yield major, minor, fields[1]


def _throttle_devices(contents: str) -> list[ThrottleDevice]:
    return [
        ThrottleDevice(major=major, minor=minor, rate=_parse_int(rate, signed=False))
        for major, minor, rate in _device_entries(contents)
    ]


def _unsigned(contents: str, bits: int = 64) -> int:
    return _parse_int(contents.strip(), bits=bits, signed=False)


def _signed(contents: str) -> int:
    return _parse_int(contents.strip())


@dataclass
class CgroupV1:
    """A cgroup v1 hierarchy mounted at ``mount_path``."""

    mount_path: str
    proc_root: str = "/proc"
    hugepages_dir: str = "/sys/kernel/mm/hugepages"

    def _check_absolute(self, subsystem: str, cg_path: str) -> None:
        if not is_abs("linux", cg_path):
            return
        try:
            os.stat(join("linux", self.mount_path, subsystem, cg_path))
        except FileNotFoundError:
            raise CgroupPathError(CgroupPathError.ABS_PATH_REL_TO_MOUNT, _ABS_MESSAGE) from None

    def _path_for(self, pid: int, cg_path: str, subsystem: str, file_name: str) -> str:
        if is_abs("linux", cg_path):
            return join("linux", self.mount_path, subsystem, cg_path, file_name)
        sub_path = get_subsystem_path(pid, subsystem, self.proc_root)
        if cg_path not in sub_path:
            raise CgroupError(f"cgroup subsystem {subsystem} is not mounted as expected")
        return join("linux", self.mount_path, subsystem, sub_path, file_name)

    def _read(
        self,
        pid: int,
        cg_path: str,
        subsystem: str,
        name: str,
        *,
        attach_required: bool = True,
    ) -> str:
        path = self._path_for(pid, cg_path, subsystem, f"{subsystem}.{name}")
        try:
            with open(path, encoding="utf-8") as handle:
                return handle.read()
        except FileNotFoundError:
            if not attach_required:
                raise
            raise CgroupPathError(CgroupPathError.PATH_ATTACH, _ATTACH_MESSAGE) from None

    def block_io_data(self, pid: int, cg_path: str) -> LinuxBlockIO:
        """Read the blkio controller settings."""
        self._check_absolute("blkio", cg_path)

        def read(name: str) -> str:
            return self._read(pid, cg_path, "blkio", name)

        block_io = LinuxBlockIO()
        block_io.weight = _unsigned(read("weight"), bits=16)
        block_io.leaf_weight = _unsigned(read("leaf_weight"), bits=16)
        for major, minor, weight in _device_entries(read("weight_device")):
            block_io.weight_device.append(
                WeightDevice(
                    major=major,
                    minor=minor,
                    weight=_parse_int(weight, bits=16, signed=False),
                )
            )
        for major, minor, leaf_weight in _device_entries(read("leaf_weight_device")):
            block_io.weight_device_for(major, minor).leaf_weight = _parse_int(
                leaf_weight, bits=16, signed=False
            )
        block_io.throttle_read_bps_device = _throttle_devices(read("throttle.read_bps_device"))
        block_io.throttle_write_bps_device = _throttle_devices(read("throttle.write_bps_device"))
        block_io.throttle_read_iops_device = _throttle_devices(read("throttle.read_iops_device"))
        block_io.throttle_write_iops_device = _throttle_devices(
            read("throttle.write_iops_device")
        )
        return block_io

    def cpu_data(self, pid: int, cg_path: str) -> LinuxCPU:
        """Read the cpu and cpuset controller settings and realtime limits."""
        self._check_absolute("cpu", cg_path)
        cpu = LinuxCPU()
        cpu.shares = _unsigned(self._read(pid, cg_path, "cpu", "shares"))
        cpu.quota = _signed(self._read(pid, cg_path, "cpu", "cfs_quota_us"))
        cpu.period = _unsigned(self._read(pid, cg_path, "cpu", "cfs_period_us"))

        # Realtime group scheduling may be unavailable; the system-wide
        # values under /proc are always present.
        kernel_dir = os.path.join(self.proc_root, "sys", "kernel")
        with open(os.path.join(kernel_dir, "sched_rt_period_us"), encoding="utf-8") as handle:
            cpu.realtime_period = _unsigned(handle.read())
        with open(os.path.join(kernel_dir, "sched_rt_runtime_us"), encoding="utf-8") as handle:
            cpu.realtime_runtime = _signed(handle.read())

        cpu.cpus = self._read(pid, cg_path, "cpuset", "cpus", attach_required=False).strip()
        cpu.mems = self._read(pid, cg_path, "cpuset", "mems", attach_required=False).strip()
        return cpu

    def devices_data(self, pid: int, cg_path: str) -> list[DeviceCgroup]:
        """Read the device access rules of the devices controller."""
        contents = self._read(pid, cg_path, "devices", "list", attach_required=False)
        rules = []
        for line in contents.strip().split("\n"):
            if not line:
                continue
            fields = line.split(" ")
            if len(fields) < 3:
                raise ValueError(f"malformed device rule: {line!r}")
            numbers = fields[1].split(":")
            if len(numbers) < 2:
                raise ValueError(f"malformed device numbers: {fields[1]!r}")
            major = 0 if numbers[0] == "*" else _parse_int(numbers[0])
            minor = 0 if numbers[1] == "*" else _parse_int(numbers[1])
            rules.append(
                DeviceCgroup(
                    allow=True,
                    type=fields[0],
                    major=major,
                    minor=minor,
                    access=fields[2],
                )
            )
        return rules

    def hugepage_limit_data(self, pid: int, cg_path: str) -> list[HugepageLimit]:
        """Read the hugetlb limit for every page size the kernel offers."""
        self._check_absolute("hugetlb", cg_path)
        limits = []
        for page_size in hugepage_sizes(self.hugepages_dir):
            contents = self._read(pid, cg_path, "hugetlb", f"{page_size}.limit_in_bytes")
            limits.append(HugepageLimit(pagesize=page_size, limit=_unsigned(contents)))
        return limits

    def memory_data(self, pid: int, cg_path: str) -> LinuxMemory:
        """Read the memory controller settings."""
        self._check_absolute("memory", cg_path)

        def read(name: str) -> str:
            return self._read(pid, cg_path, "memory", name)

        memory = LinuxMemory()
        memory.limit = _signed(read("limit_in_bytes"))
        memory.reservation = _signed(read("soft_limit_in_bytes"))
        memory.swap = _signed(read("memsw.limit_in_bytes"))
        memory.kernel = _signed(read("kmem.limit_in_bytes"))
        memory.kernel_tcp = _signed(read("kmem.tcp.limit_in_bytes"))
        memory.swappiness = _unsigned(read("swappiness"))

        first_line = read("oom_control").split("\n")[0].split(" ")
        if len(first_line) < 2:
            raise ValueError(f"malformed oom_control line: {' '.join(first_line)!r}")
        memory.disable_oom_killer = _parse_int(first_line[1]) == 1
        return memory

    def network_data(self, pid: int, cg_path: str) -> LinuxNetwork:
        """Read the net_cls class id and net_prio interface priorities."""
        self._check_absolute("net_cls", cg_path)
        network = LinuxNetwork()
        class_id = _unsigned(self._read(pid, cg_path, "net_cls", "classid"))
        network.class_id = class_id & 0xFFFFFFFF

        contents = self._read(pid, cg_path, "net_prio", "ifpriomap", attach_required=False)
        for line in contents.strip().split("\n"):
            if not line:
                continue
            fields = line.split(" ")
            if len(fields) < 2:
                raise ValueError(f"malformed priority entry: {line!r}")
            priority = _parse_int(fields[1], signed=False)
            network.priorities.append(
                InterfacePriority(name=fields[0], priority=priority & 0xFFFFFFFF)
            )
        return network

    def pids_data(self, pid: int, cg_path: str) -> LinuxPids:
        """Read the pids controller limit."""
        self._check_absolute("pids", cg_path)
        contents = self._read(pid, cg_path, "pids", "max", attach_required=False)
        return LinuxPids(limit=_signed(contents))