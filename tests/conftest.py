"""
Pytest configuration and shared fixtures.
"""

import matplotlib

matplotlib.use("Agg")

import pytest


@pytest.fixture
def config():
    """Round-number timing: 120 bpm gives a 500ms beat, 100ms dwell."""
    from jugglesim.core import SchedulerConfig
    return SchedulerConfig(bpm=120.0, dwell_ratio=0.2, dwell_min=0.0)


@pytest.fixture
def layout():
    """Default 800x400 drawing area."""
    from jugglesim.core import LayoutConfig
    return LayoutConfig()


@pytest.fixture
def make_scheduler(config, layout):
    """Factory for schedulers sharing the fixture config and layout."""
    from jugglesim.core import JugglingScheduler

    def _make(siteswap="3", **overrides):
        from dataclasses import replace
        cfg = replace(config, **overrides) if overrides else config
        return JugglingScheduler(siteswap, config=cfg, layout=layout)

    return _make
