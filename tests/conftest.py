from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterator

import pytest

from tests._fixtures.project_builder import ProjectBuilder

FROZEN_AT = datetime(2025, 1, 15, 12, 30, 45, 123000, tzinfo=timezone.utc)


@pytest.fixture
def project_builder(tmp_path: Path) -> ProjectBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return ProjectBuilder(tmp_path)


@pytest.fixture
def frozen_clock() -> Callable[[], datetime]:
    """Clock that always reports the same instant."""
    return lambda: FROZEN_AT


@pytest.fixture(autouse=True)
def _reset_fraggen_logger() -> Iterator[None]:
    """Undo configure_logging so CLI tests do not leak handlers into later tests."""
    yield
    logger = logging.getLogger("fraggen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
