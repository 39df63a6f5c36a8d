"""
Query Frequency Translation
Turns a "max DNS queries per minute" value into the sleep between queries.
"""

from datetime import timedelta


def freq_to_duration(freq, default):
    """
    Convert a max-queries-per-minute value into an inter-query delay.

    This is a fixed spacing, not a token bucket, so the achieved rate is
    only close to the requested one. Integer division is intentional.

    Args:
        freq: Maximum queries per minute (0 or less means "use default")
        default: Engine's default delay (timedelta)

    Returns:
        timedelta to sleep between queries
    """
    if freq > 0:
        if freq < 60:
            # Less than one per second: whole seconds between queries
            return timedelta(seconds=60 // freq)

        per_second = freq // 60
        millis = 1000 // per_second
        if per_second < 1000 and millis > 1:
            return timedelta(milliseconds=millis)

    return default
