"""Backoff schedules for the retry executor.

Delays are expressed in milliseconds. The attempt number passed to
calculate_delay is the count of attempts already made, so the delay before
the second attempt uses attempt=1.
"""

import asyncio
from enum import Enum


class BackoffStrategy(str, Enum):
    """How the delay grows between attempts.

    Values:
        EXPONENTIAL: base * 2^(attempt - 1)
        LINEAR: base * attempt
        NONE: constant base delay
    """

    EXPONENTIAL = "exponential"
    LINEAR = "linear"
    NONE = "none"


def calculate_delay(
    base_delay: float, attempt: int, strategy: BackoffStrategy | str
) -> float:
    """Calculate the delay before the next attempt.

    Args:
        base_delay: Base delay in milliseconds
        attempt: Number of attempts already made (1-based)
        strategy: Backoff strategy (enum member or its string value)

    Returns:
        Delay in milliseconds

    Example:
        >>> [calculate_delay(1000, n, "exponential") for n in range(1, 5)]
        [1000, 2000, 4000, 8000]
    """
    strategy = BackoffStrategy(strategy)

    if strategy is BackoffStrategy.EXPONENTIAL:
        return base_delay * 2 ** (attempt - 1)
    if strategy is BackoffStrategy.LINEAR:
        return base_delay * attempt
    return base_delay


async def sleep(delay_ms: float) -> None:
    """Suspend the current task for delay_ms milliseconds."""
    await asyncio.sleep(delay_ms / 1000)
