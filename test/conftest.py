import logging
import os

import pytest
from hypothesis import HealthCheck, settings

settings.register_profile(
    "default", max_examples=200, suppress_health_check=[HealthCheck.too_slow], deadline=None
)
settings.register_profile(
    "ci", max_examples=1000, suppress_health_check=[HealthCheck.too_slow], deadline=None
)
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))


@pytest.fixture
def package_logger():
    # Tests that touch the package logger get it back in its original state.
    logger = logging.getLogger("semver_range")
    level = logger.level
    yield logger
    logger.setLevel(level)
