# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Shared fixtures for kotlex tests."""

import logging
from pathlib import Path
from typing import Callable

import pytest

from kotlex.analyzer import LexicalAnalyzer
from kotlex.config import Config
from kotlex.logging_setup import QUIET_LOGGERS
from kotlex.models import AnalysisResult

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the annotated Input.kt and Input.java files."""
    return FIXTURES_DIR


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Default configuration that never picks up a stray .kotlex.yml."""
    return Config(config_path=tmp_path / "missing.yml")


@pytest.fixture
def analyzer(config: Config) -> LexicalAnalyzer:
    return LexicalAnalyzer(config)


@pytest.fixture
def analyze(analyzer: LexicalAnalyzer) -> Callable[[str], AnalysisResult]:
    """Analyze an inline source snippet."""

    def _analyze(source: str) -> AnalysisResult:
        return analyzer.analyze_source(source)

    return _analyze


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest configured it."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    quiet_levels = {name: logging.getLogger(name).level for name in QUIET_LOGGERS}
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    for name, quiet_level in quiet_levels.items():
        logging.getLogger(name).setLevel(quiet_level)
