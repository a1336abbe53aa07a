"""Elapsed time display formatting."""

from decimal import ROUND_HALF_UP, Decimal

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND


def format_elapsed(elapsed_ms: float) -> str:
    """Render an elapsed time for display.

    Under a minute: ``"12.345s"``. A minute or more: ``"1:05.432"`` with
    unbounded minutes and no unit suffix.

    The value is rounded to whole milliseconds before choosing a format, so
    59999.6 ms renders as ``"1:00.000"`` rather than ``"60.000s"``.
    """
    if elapsed_ms < 0:
        raise ValueError(f"elapsed time cannot be negative: {elapsed_ms}")

    total_ms = int(Decimal(str(elapsed_ms)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    if total_ms < MS_PER_MINUTE:
        seconds, millis = divmod(total_ms, MS_PER_SECOND)
        return f"{seconds}.{millis:03d}s"

    minutes, remainder = divmod(total_ms, MS_PER_MINUTE)
    seconds, millis = divmod(remainder, MS_PER_SECOND)
    return f"{minutes}:{seconds:02d}.{millis:03d}"
