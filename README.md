# ocitools

Building blocks for tools that work with OCI runtime configurations and
the containers started from them: path handling for a named target
operating system, readers for the mount table and cgroup v1 hierarchies,
and parsers for the compact forms in which configuration values are
written on a command line.

## Modules

- `ocitools.paths` – `separator`, `is_abs`, `clean`, `join` and
  `abs_path`, each taking the target operating system (`"linux"`,
  `"windows"`, ...) as its first argument, independent of the host.
- `ocitools.ancestry` – `is_ancestor` tells whether one path is a strict
  ancestor of another on the target operating system.
- `ocitools.mountinfo` – `MountInfo` records parsed with
  `parse_mountinfo`, the current process's mounts with `get_mounts`
  (empty on Windows, `OSError` on platforms other than Linux and Windows)
  and another process's with `pid_mount_info`.
- `ocitools.cgroup_find` – `find_cgroup` reads a mountinfo file and
  returns a `CgroupV1` for the first cgroup v1 mount.
- `ocitools.cgroup_v1` – `CgroupV1` reads a cgroup's settings back:
  `block_io_data`, `cpu_data`, `devices_data`, `hugepage_limit_data`,
  `memory_data`, `network_data` and `pids_data`.
- `ocitools.cgroup_resources` – the dataclasses those methods return
  (`LinuxBlockIO`, `LinuxCPU`, `DeviceCgroup`, `HugepageLimit`,
  `LinuxMemory`, `LinuxNetwork`, `LinuxPids` and their parts).
- `ocitools.cgroupfs` – `get_subsystem_path`, `parse_device_id`,
  `in_bytes`, `format_page_size`, `hugepage_sizes`, and the exceptions
  `CgroupError` and `CgroupPathError` (whose `code` names the violated
  cgroup path requirement).
- `ocitools.specargs` – parsers for console sizes, ID mappings, hugepage
  limits, network priorities, rlimits, namespaces, Windows devices,
  annotation labels, sysctls, device weights and throttle devices.
- `ocitools.deviceargs` – `parse_device` returns a `LinuxDevice`;
  `parse_device_cgroup_rule` returns a `DeviceCgroup`.
- `ocitools.seccompargs` – `parse_seccomp_rules` returns `SyscallRule`
  objects; `parse_architectures` splits an architecture list.
- `ocitools.consolesocket` – `TerminalRequest` and `Response` messages
  with `to_json`, and `decode_message` to read either back.

## Paths for another operating system

```python
from ocitools.paths import abs_path, clean, is_abs
from ocitools.ancestry import is_ancestor

clean("linux", "/../a")                      # "/a"
clean("windows", r"c:\\a")                   # r"c:\a"
is_abs("windows", r"c:\a")                   # True
abs_path("linux", "../../b", "/cwd")         # "/b"
abs_path("windows", r"..\a", r"c:\cwd")      # r"c:\a"
is_ancestor("linux", "/a", "../a/b", "/cwd") # True
is_ancestor("linux", "/a", "/ab", "/cwd")    # False
```

## Parsing configuration values

```python
from ocitools.specargs import parse_id_mapping, parse_rlimit
from ocitools.deviceargs import parse_device
from ocitools.seccompargs import parse_seccomp_rules

parse_id_mapping("0:1000:65536")         # (0, 1000, 65536)
parse_rlimit("RLIMIT_NOFILE:1024:512")   # ("RLIMIT_NOFILE", 1024, 512)
parse_device("c:1:3:/dev/null:fileMode=438").file_mode  # 438
[r.syscall for r in parse_seccomp_rules("errno", "getcwd,kill")]  # ["getcwd", "kill"]
```

Malformed values raise `ValueError` instead of returning partial results.

## Reading a container's cgroups

```python
from ocitools.cgroup_find import find_cgroup

cgroup = find_cgroup("/proc/self/mountinfo")
memory = cgroup.memory_data(1, "/mycontainer")
pids = cgroup.pids_data(1, "/mycontainer")
```

Only cgroup v1 hierarchies are read; a host with only a cgroup v2 mount
raises `CgroupError`.

## What this package does not do

It is a library only and installs no command. It does not build,
write or validate complete runtime configuration files or bundles, does
not check a running container against a configuration, does not classify
findings by requirement level, and has no parser for environment
variable files.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.