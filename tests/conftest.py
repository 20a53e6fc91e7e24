"""Shared fixtures for the tracker test suite."""
from __future__ import annotations

import pytest

from core.state import default_start_state
from engine.config import TrackerConfig
from engine.controller import TrackerController
from engine.sim_runner import FixedClock
from storage.backends.memory import MemoryStore
from storage.bridge import PersistenceBridge


@pytest.fixture
def config() -> TrackerConfig:
    return TrackerConfig(time_format="%H:%M:%S")


@pytest.fixture
def start_state():
    return default_start_state()


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def bridge(memory_store, config) -> PersistenceBridge:
    return PersistenceBridge.from_config(memory_store, config)


@pytest.fixture
def controller(config) -> TrackerController:
    return TrackerController(config, clock=FixedClock())


@pytest.fixture
def attached_controller(config, bridge) -> TrackerController:
    ctl = TrackerController(config, clock=FixedClock())
    ctl.attach(bridge)
    return ctl
