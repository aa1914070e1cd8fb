"""Path handling, mount and cgroup v1 readers, and argument parsers for OCI runtime configurations."""

__version__ = "0.1.0"