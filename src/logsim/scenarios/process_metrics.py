"""Process and host resource metrics for health and infrastructure events."""

import asyncio
import platform
import socket
import sys
import time
from dataclasses import dataclass

import psutil

_MB = 1024 * 1024


@dataclass(frozen=True)
class ProcessMetrics:
    """Snapshot of process and host resource usage."""

    pid: int
    uptime_s: float
    rss_bytes: int
    vms_bytes: int
    heap_bytes: int
    cpu_load: tuple[float, float, float]
    total_memory_bytes: int
    free_memory_bytes: int
    open_handles: int
    active_tasks: int
    hostname: str
    platform: str
    arch: str
    cpu_count: int

    @property
    def rss_mb(self) -> int:
        return round(self.rss_bytes / _MB)

    @property
    def vms_mb(self) -> int:
        return round(self.vms_bytes / _MB)

    @property
    def heap_mb(self) -> int:
        return round(self.heap_bytes / _MB)

    @property
    def total_memory_mb(self) -> int:
        return round(self.total_memory_bytes / _MB)

    @property
    def free_memory_mb(self) -> int:
        return round(self.free_memory_bytes / _MB)


def _open_handles(proc: psutil.Process) -> int:
    try:
        if hasattr(proc, "num_fds"):
            return proc.num_fds()
        return proc.num_handles()
    except (psutil.Error, AttributeError):
        return 0


def _active_tasks() -> int:
    try:
        return len(asyncio.all_tasks())
    except RuntimeError:
        # no running event loop
        return 0


def collect_process_metrics() -> ProcessMetrics:
    """Read current resource usage of this process and host."""
    # Resolved per call so a forked worker reports itself, not its parent.
    proc = psutil.Process()
    mem = proc.memory_info()
    vm = psutil.virtual_memory()
    try:
        load = tuple(round(v, 2) for v in psutil.getloadavg())
    except (OSError, AttributeError):
        load = (0.0, 0.0, 0.0)
    return ProcessMetrics(
        pid=proc.pid,
        uptime_s=max(0.0, time.time() - proc.create_time()),
        rss_bytes=mem.rss,
        vms_bytes=mem.vms,
        heap_bytes=getattr(mem, "data", mem.rss),
        cpu_load=load,  # type: ignore[arg-type]
        total_memory_bytes=vm.total,
        free_memory_bytes=vm.available,
        open_handles=_open_handles(proc),
        active_tasks=_active_tasks(),
        hostname=socket.gethostname(),
        platform=sys.platform,
        arch=platform.machine(),
        cpu_count=psutil.cpu_count() or 1,
    )
