# ================================================================================
# Retrying Assertions
# ================================================================================
#
# Assertions that re-evaluate their check a few times before failing, for
# page state that settles shortly after an interaction (a results banner,
# a toggled tree).
#
# Usage:
#   assert_with_retry(lambda: page.get_selected_message() == expected,
#                     "Selected checkboxes do not match", retries=2)
#   assert_equal_with_retry(page.get_title, "DEMOQA", "Wrong title")
#
# ================================================================================

import time
from typing import Any, Callable, Optional

from loguru import logger


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        retries: int = 2,
        delay_seconds: float = 0.5,
        backoff_multiplier: float = 2.0,
        max_delay_seconds: float = 5.0
    ):
        """
        Initialize retry configuration.

        Args:
            retries: Extra evaluations after the first failed one
            delay_seconds: Initial delay between evaluations
            backoff_multiplier: Multiplier for exponential backoff
            max_delay_seconds: Maximum delay between evaluations
        """
        self.retries = retries
        self.delay_seconds = delay_seconds
        self.backoff_multiplier = backoff_multiplier
        self.max_delay_seconds = max_delay_seconds


def assert_with_retry(
    check: Callable[[], Any],
    message: str,
    retries: Optional[int] = None,
    delay: Optional[float] = None,
    config: Optional[RetryConfig] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """
    Assert that ``check()`` is truthy, re-evaluating it on failure.

    Args:
        check: Zero-argument callable evaluated on every attempt
        message: Assertion message used on final failure
        retries: Overrides config.retries
        delay: Overrides config.delay_seconds
        config: RetryConfig controlling backoff
        sleep: Pause function (seconds)

    Raises:
        AssertionError: When every attempt is falsy
    """
    config = config or RetryConfig()
    retries = config.retries if retries is None else retries
    delay = config.delay_seconds if delay is None else delay
    attempts = retries + 1

    for attempt in range(1, attempts + 1):
        if check():
            return
        if attempt < attempts:
            logger.warning(
                f"Attempt {attempt}/{attempts} failed: {message}. Retrying in {delay}s..."
            )
            sleep(delay)
            delay = min(delay * config.backoff_multiplier, config.max_delay_seconds)

    logger.error(f"All {attempts} attempts failed: {message}")
    raise AssertionError(message)


def assert_equal_with_retry(
    actual: Callable[[], Any],
    expected: Any,
    message: str,
    retries: Optional[int] = None,
    delay: Optional[float] = None,
    config: Optional[RetryConfig] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """
    Assert that ``actual()`` equals ``expected``, re-reading it on failure.

    The final AssertionError reports the last value read.
    """
    last = []

    def check() -> bool:
        value = actual()
        last[:] = [value]
        return value == expected

    try:
        assert_with_retry(
            check, message, retries=retries, delay=delay, config=config, sleep=sleep
        )
    except AssertionError:
        raise AssertionError(f"{message}\nExpected: {expected!r}\nActual:   {last[0]!r}") from None
