"""Tests for process and host metrics collection."""

import os

import psutil

from logsim.scenarios import process_metrics
from logsim.scenarios.process_metrics import collect_process_metrics


def test_snapshot_describes_this_process() -> None:
    metrics = collect_process_metrics()
    assert metrics.pid == os.getpid()
    assert metrics.rss_bytes > 0
    assert metrics.cpu_count >= 1
    assert len(metrics.cpu_load) == 3


def test_process_is_resolved_on_every_call(monkeypatch) -> None:
    """A forked worker must not keep reporting the process that imported the module."""
    real_process = psutil.Process
    resolved = []

    def tracking_process():
        proc = real_process()
        resolved.append(proc.pid)
        return proc

    monkeypatch.setattr(process_metrics.psutil, "Process", tracking_process)
    collect_process_metrics()
    collect_process_metrics()

    assert resolved == [os.getpid(), os.getpid()]
