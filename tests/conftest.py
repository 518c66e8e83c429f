"""Shared fixtures: seeded contexts, fixed process metrics and capturing sinks."""

import random

import pytest

from logsim.scenarios import IdGenerator, ScenarioContext
from logsim.scenarios.process_metrics import ProcessMetrics
from logsim.sinks import MemorySink

FIXED_MILLIS = 1_700_000_000_000


def fixed_metrics() -> ProcessMetrics:
    return ProcessMetrics(
        pid=4242,
        uptime_s=120.5,
        rss_bytes=80 * 1024 * 1024,
        vms_bytes=400 * 1024 * 1024,
        heap_bytes=60 * 1024 * 1024,
        cpu_load=(0.5, 0.4, 0.3),
        total_memory_bytes=8192 * 1024 * 1024,
        free_memory_bytes=2048 * 1024 * 1024,
        open_handles=12,
        active_tasks=3,
        hostname="test-host",
        platform="linux",
        arch="x86_64",
        cpu_count=4,
    )


def make_context(seed: int = 1234) -> ScenarioContext:
    rng = random.Random(seed)
    return ScenarioContext(
        rng=rng,
        ids=IdGenerator(rng, millis=lambda: FIXED_MILLIS),
        metrics=fixed_metrics,
    )


@pytest.fixture
def ctx() -> ScenarioContext:
    return make_context()


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()
