"""Onboarding marker file and the retry delay between rendezvous attempts."""

from __future__ import annotations

import os
import random
import time
from pathlib import Path
from typing import Callable, Protocol

__all__ = [
    "DEVICE_ONBOARDING_EXECUTED_MARKER_FILE",
    "MARKER_FILE_ENV",
    "RV_DEFAULT_DELAY_SEC",
    "RV_DEFAULT_DELAY_OFFSET",
    "RV_USER_DEFINED_DELAY_OFFSET",
    "marker_file_location",
    "mark_device_onboarding_executed",
    "get_delay_between_retries",
    "sleep_between_retries",
]

DEVICE_ONBOARDING_EXECUTED_MARKER_FILE = "/etc/device_onboarding_performed"
MARKER_FILE_ENV = "DEVICE_ONBOARDING_EXECUTED_MARKER_FILE_PATH"

RV_DEFAULT_DELAY_SEC = 120.0
RV_DEFAULT_DELAY_OFFSET = 30.0
RV_USER_DEFINED_DELAY_OFFSET = 0.25


class _Uniform(Protocol):
    def uniform(self, a: float, b: float) -> float: ...


def marker_file_location() -> Path:
    """Return where the "onboarding performed" marker file lives.

    The environment variable named by :data:`MARKER_FILE_ENV` overrides the
    default location.
    """
    override = os.environ.get(MARKER_FILE_ENV)
    if override is not None:
        return Path(override)
    return Path(DEVICE_ONBOARDING_EXECUTED_MARKER_FILE)


def mark_device_onboarding_executed() -> Path:
    """Create the marker file recording that onboarding ran; return its path."""
    path = marker_file_location()
    try:
        path.write_text("executed")
    except OSError as err:
        raise OSError(
            err.errno, f"Error creating executed marker file: {err.strerror}", str(path)
        ) from err
    return path


def get_delay_between_retries(rv_entry_delay: int, rng: _Uniform | None = None) -> int:
    """Return a randomised number of whole seconds to wait before retrying.

    A delay of zero means no delay was configured: a value around the default
    is chosen. Otherwise the configured delay is varied by a quarter either way.
    """
    if rv_entry_delay < 0:
        raise ValueError(f"rendezvous delay must not be negative, got {rv_entry_delay}")
    source: _Uniform = rng if rng is not None else random.Random()
    if rv_entry_delay == 0:
        low = RV_DEFAULT_DELAY_SEC - RV_DEFAULT_DELAY_OFFSET
        high = RV_DEFAULT_DELAY_SEC + RV_DEFAULT_DELAY_OFFSET
    else:
        low = rv_entry_delay * (1.0 - RV_USER_DEFINED_DELAY_OFFSET)
        high = rv_entry_delay * (1.0 + RV_USER_DEFINED_DELAY_OFFSET)
    return int(source.uniform(low, high))


def sleep_between_retries(
    rv_entry_delay: int, sleep: Callable[[float], object] = time.sleep
) -> int:
    """Sleep for a randomised retry delay and return the seconds slept."""
    seconds = get_delay_between_retries(rv_entry_delay)
    sleep(seconds)
    return seconds