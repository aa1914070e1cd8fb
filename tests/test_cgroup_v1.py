import pytest

from ocitools.cgroup_resources import (
    DeviceCgroup,
    HugepageLimit,
    InterfacePriority,
    LinuxPids,
    ThrottleDevice,
    WeightDevice,
)
from ocitools.cgroup_v1 import CgroupV1
from ocitools.cgroupfs import CgroupError, CgroupPathError

PID = 42


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)


@pytest.fixture
def layout(tmp_path):
    mount = tmp_path / "cg"
    proc = tmp_path / "proc"
    hugepages = tmp_path / "hugepages"
    hugepages.mkdir()
    _write(proc / "sys" / "kernel" / "sched_rt_period_us", "1000000\n")
    _write(proc / "sys" / "kernel" / "sched_rt_runtime_us", "950000\n")
    cgroup = CgroupV1(
        mount_path=str(mount),
        proc_root=str(proc),
        hugepages_dir=str(hugepages),
    )
    return cgroup, mount, proc, hugepages


def _blkio_files(directory):
    _write(directory / "blkio.weight", "500\n")
    _write(directory / "blkio.leaf_weight", "300\n")
    _write(directory / "blkio.weight_device", "8:0 400\n8:16 200\n")
    _write(directory / "blkio.leaf_weight_device", "8:0 100\n8:32 50\n")
    _write(directory / "blkio.throttle.read_bps_device", "8:0 1048576\n")
    _write(directory / "blkio.throttle.write_bps_device", "")
    _write(directory / "blkio.throttle.read_iops_device", "8:0 10\n8:16 20\n")
    _write(directory / "blkio.throttle.write_iops_device", "8:16 30\n")


def test_block_io_absolute(layout):
    cgroup, mount, _, _ = layout
    _blkio_files(mount / "blkio" / "test")
    data = cgroup.block_io_data(PID, "/test")
    assert data.weight == 500
    assert data.leaf_weight == 300
    assert data.weight_device == [
        WeightDevice(8, 0, weight=400, leaf_weight=100),
        WeightDevice(8, 16, weight=200),
        WeightDevice(8, 32, leaf_weight=50),
    ]
    assert data.throttle_read_bps_device == [ThrottleDevice(8, 0, 1048576)]
    assert data.throttle_write_bps_device == []
    assert data.throttle_read_iops_device == [ThrottleDevice(8, 0, 10), ThrottleDevice(8, 16, 20)]
    assert data.throttle_write_iops_device == [ThrottleDevice(8, 16, 30)]


def test_block_io_relative(layout):
    cgroup, mount, proc, _ = layout
    _write(proc / str(PID) / "cgroup", "3:blkio:/parent/mycg\n")
    _blkio_files(mount / "blkio" / "parent" / "mycg")
    assert cgroup.block_io_data(PID, "mycg").weight == 500


def test_block_io_relative_not_mounted(layout):
    cgroup, _, proc, _ = layout
    _write(proc / str(PID) / "cgroup", "3:blkio:/other\n")
    with pytest.raises(CgroupError, match="blkio is not mounted as expected") as info:
        cgroup.block_io_data(PID, "mycg")
    assert not isinstance(info.value, CgroupPathError)


def test_block_io_absolute_missing_dir(layout):
    cgroup, _, _, _ = layout
    with pytest.raises(CgroupPathError) as info:
        cgroup.block_io_data(PID, "/absent")
    assert info.value.code == CgroupPathError.ABS_PATH_REL_TO_MOUNT


def test_block_io_missing_file(layout):
    cgroup, mount, _, _ = layout
    (mount / "blkio" / "test").mkdir(parents=True)
    with pytest.raises(CgroupPathError) as info:
        cgroup.block_io_data(PID, "/test")
    assert info.value.code == CgroupPathError.PATH_ATTACH


def test_block_io_weight_out_of_range(layout):
    cgroup, mount, _, _ = layout
    directory = mount / "blkio" / "test"
    _blkio_files(directory)
    _write(directory / "blkio.weight", "70000\n")
    with pytest.raises(ValueError):
        cgroup.block_io_data(PID, "/test")


def test_cpu_data(layout):
    cgroup, mount, _, _ = layout
    cpu_dir = mount / "cpu" / "test"
    _write(cpu_dir / "cpu.shares", "1024\n")
    _write(cpu_dir / "cpu.cfs_quota_us", "-1\n")
    _write(cpu_dir / "cpu.cfs_period_us", "100000\n")
    cpuset_dir = mount / "cpuset" / "test"
    _write(cpuset_dir / "cpuset.cpus", "0-3\n")
    _write(cpuset_dir / "cpuset.mems", "0\n")
    data = cgroup.cpu_data(PID, "/test")
    assert data.shares == 1024
    assert data.quota == -1
    assert data.period == 100000
    assert data.realtime_period == 1000000
    assert data.realtime_runtime == 950000
    assert data.cpus == "0-3"
    assert data.mems == "0"


def test_cpu_data_missing_cpuset_is_plain_error(layout):
    cgroup, mount, _, _ = layout
    cpu_dir = mount / "cpu" / "test"
    _write(cpu_dir / "cpu.shares", "1024\n")
    _write(cpu_dir / "cpu.cfs_quota_us", "-1\n")
    _write(cpu_dir / "cpu.cfs_period_us", "100000\n")
    with pytest.raises(FileNotFoundError):
        cgroup.cpu_data(PID, "/test")


def test_devices_data(layout):
    cgroup, mount, _, _ = layout
    _write(mount / "devices" / "test" / "devices.list", "a *:* rwm\nc 1:3 rw\n")
    assert cgroup.devices_data(PID, "/test") == [
        DeviceCgroup(allow=True, type="a", major=0, minor=0, access="rwm"),
        DeviceCgroup(allow=True, type="c", major=1, minor=3, access="rw"),
    ]


def test_devices_data_bad_major(layout):
    cgroup, mount, _, _ = layout
    _write(mount / "devices" / "test" / "devices.list", "c x:3 rw\n")
    with pytest.raises(ValueError):
        cgroup.devices_data(PID, "/test")


def test_hugepage_limit_data(layout):
    cgroup, mount, _, hugepages = layout
    (hugepages / "hugepages-2048kB").mkdir()
    _write(mount / "hugetlb" / "test" / "hugetlb.2MB.limit_in_bytes", "4194304\n")
    assert cgroup.hugepage_limit_data(PID, "/test") == [HugepageLimit("2MB", 4194304)]


def test_hugepage_limit_missing_file(layout):
    cgroup, mount, _, hugepages = layout
    (hugepages / "hugepages-2048kB").mkdir()
    (mount / "hugetlb" / "test").mkdir(parents=True)
    with pytest.raises(CgroupPathError) as info:
        cgroup.hugepage_limit_data(PID, "/test")
    assert info.value.code == CgroupPathError.PATH_ATTACH


def _memory_files(directory, oom="oom_kill_disable 1\nunder_oom 0\n"):
    _write(directory / "memory.limit_in_bytes", "1073741824\n")
    _write(directory / "memory.soft_limit_in_bytes", "536870912\n")
    _write(directory / "memory.memsw.limit_in_bytes", "2147483648\n")
    _write(directory / "memory.kmem.limit_in_bytes", "268435456\n")
    _write(directory / "memory.kmem.tcp.limit_in_bytes", "134217728\n")
    _write(directory / "memory.swappiness", "60\n")
    _write(directory / "memory.oom_control", oom)


def test_memory_data(layout):
    cgroup, mount, _, _ = layout
    _memory_files(mount / "memory" / "test")
    data = cgroup.memory_data(PID, "/test")
    assert data.limit == 1073741824
    assert data.reservation == 536870912
    assert data.swap == 2147483648
    assert data.kernel == 268435456
    assert data.kernel_tcp == 134217728
    assert data.swappiness == 60
    assert data.disable_oom_killer is True


def test_memory_oom_enabled(layout):
    cgroup, mount, _, _ = layout
    _memory_files(mount / "memory" / "test", oom="oom_kill_disable 0\n")
    assert cgroup.memory_data(PID, "/test").disable_oom_killer is False


def test_network_data(layout):
    cgroup, mount, _, _ = layout
    _write(mount / "net_cls" / "test" / "net_cls.classid", "1048577\n")
    _write(mount / "net_prio" / "test" / "net_prio.ifpriomap", "lo 0\neth0 5\n")
    data = cgroup.network_data(PID, "/test")
    assert data.class_id == 1048577
    assert data.priorities == [InterfacePriority("lo", 0), InterfacePriority("eth0", 5)]


def test_network_missing_classid(layout):
    cgroup, mount, _, _ = layout
    (mount / "net_cls" / "test").mkdir(parents=True)
    with pytest.raises(CgroupPathError) as info:
        cgroup.network_data(PID, "/test")
    assert info.value.code == CgroupPathError.PATH_ATTACH


def test_pids_data(layout):
    cgroup, mount, _, _ = layout
    _write(mount / "pids" / "test" / "pids.max", "100\n")
    assert cgroup.pids_data(PID, "/test") == LinuxPids(limit=100)


def test_pids_unlimited_is_error(layout):
    cgroup, mount, _, _ = layout
    _write(mount / "pids" / "test" / "pids.max", "max\n")
    with pytest.raises(ValueError):
        cgroup.pids_data(PID, "/test")


def test_pids_absolute_missing(layout):
    cgroup, _, _, _ = layout
    with pytest.raises(CgroupPathError) as info:
        cgroup.pids_data(PID, "/nowhere")
    assert info.value.code == CgroupPathError.ABS_PATH_REL_TO_MOUNT