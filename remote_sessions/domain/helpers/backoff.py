"""Backoff calculation helpers."""

from ...const import DEFAULT_RECONNECT_DELAY, MAX_BACKOFF_DELAY


def calculate_backoff_delay(
    attempt: int,
    base_delay: int = DEFAULT_RECONNECT_DELAY,
    max_delay: int = MAX_BACKOFF_DELAY,
) -> int:
    """Exponential backoff delay for a reconnect attempt.

    delay = min(base_delay * 2^(attempt-1), max_delay)

    Args:
        attempt: Attempt number (1-based)
        base_delay: Delay for the first attempt in milliseconds
        max_delay: Upper bound in milliseconds

    Returns:
        Delay in milliseconds

    Raises:
        ValueError: If attempt is less than 1

    Examples:
        >>> calculate_backoff_delay(1)
        5000
        >>> calculate_backoff_delay(3)
        20000
        >>> calculate_backoff_delay(10)
        60000
    """
    if attempt < 1:
        raise ValueError(f"Invalid attempt: {attempt} (must be >= 1)")

    # Cap the exponent so huge attempt numbers don't build huge ints
    exponent = min(attempt - 1, 32)
    return min(base_delay * (2**exponent), max_delay)

