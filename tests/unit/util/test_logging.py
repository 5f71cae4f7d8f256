"""Tests for logging configuration."""

import logging

from gouache.config import Settings
from gouache.util.logging import QUIET_LOGGERS, _level_for, setup_logging


def test_level_follows_environment():
    assert _level_for(Settings(environment="test")) == logging.WARNING
    assert _level_for(Settings(environment="production")) == logging.INFO
    assert _level_for(Settings(environment="production", debug=True)) == logging.DEBUG


def test_setup_quiets_third_party_loggers():
    setup_logging(Settings(environment="development", debug=True))

    assert logging.getLogger("gouache").level == logging.DEBUG
    for name in QUIET_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING
