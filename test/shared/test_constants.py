"""Tests for shared/constants.py — error message constants."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from shared.constants import ERROR_GEOCODE_FAILED, ERROR_INTERNAL, ERROR_NO_ADDRESS


def test_error_messages_are_nonempty_strings():
    for msg in [ERROR_NO_ADDRESS, ERROR_GEOCODE_FAILED, ERROR_INTERNAL]:
        assert isinstance(msg, str)
        assert len(msg) > 0


def test_error_messages_are_distinct():
    assert len({ERROR_NO_ADDRESS, ERROR_GEOCODE_FAILED, ERROR_INTERNAL}) == 3


def test_internal_error_reveals_no_detail():
    assert "Exception" not in ERROR_INTERNAL
    assert "Traceback" not in ERROR_INTERNAL
