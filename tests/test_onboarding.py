import random

import pytest

from fdoonboard.onboarding import (
    MARKER_FILE_ENV,
    get_delay_between_retries,
    mark_device_onboarding_executed,
    marker_file_location,
    sleep_between_retries,
)


class _Endpoint:
    """Stand-in generator that always returns one end of the range."""

    def __init__(self, upper: bool) -> None:
        self.upper = upper
        self.calls = []

    def uniform(self, a, b):
        self.calls.append((a, b))
        return b if self.upper else a


def test_default_marker_location(monkeypatch):
    monkeypatch.delenv(MARKER_FILE_ENV, raising=False)
    assert str(marker_file_location()) == "/etc/device_onboarding_performed"


def test_marker_location_from_environment(monkeypatch, tmp_path):
    target = tmp_path / "marker"
    monkeypatch.setenv(MARKER_FILE_ENV, str(target))
    assert marker_file_location() == target


def test_mark_writes_marker(monkeypatch, tmp_path):
    target = tmp_path / "marker"
    monkeypatch.setenv(MARKER_FILE_ENV, str(target))
    assert mark_device_onboarding_executed() == target
    assert target.read_text() == "executed"


def test_mark_fails_in_missing_directory(monkeypatch, tmp_path):
    monkeypatch.setenv(MARKER_FILE_ENV, str(tmp_path / "missing" / "marker"))
    with pytest.raises(OSError):
        mark_device_onboarding_executed()


def test_default_delay_endpoints():
    assert get_delay_between_retries(0, _Endpoint(upper=False)) == 90
    assert get_delay_between_retries(0, _Endpoint(upper=True)) == 150


def test_default_delay_stays_in_range():
    rng = random.Random(7)
    for _ in range(200):
        assert 90 <= get_delay_between_retries(0, rng) <= 150


def test_user_delay_range_is_symmetric():
    low_rng = _Endpoint(upper=False)
    high_rng = _Endpoint(upper=True)
    low = get_delay_between_retries(100, low_rng)
    high = get_delay_between_retries(100, high_rng)
    assert low < 100 < high
    assert high - 100 == 100 - low
    assert low_rng.calls == high_rng.calls


def test_user_delay_stays_in_range():
    rng = random.Random(3)
    low = get_delay_between_retries(40, _Endpoint(upper=False))
    high = get_delay_between_retries(40, _Endpoint(upper=True))
    for _ in range(200):
        assert low <= get_delay_between_retries(40, rng) <= high


def test_negative_delay_rejected():
    with pytest.raises(ValueError):
        get_delay_between_retries(-1)


def test_sleep_uses_computed_delay():
    slept = []
    seconds = sleep_between_retries(0, sleep=slept.append)
    assert slept == [seconds]
    assert 90 <= seconds <= 150