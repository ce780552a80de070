"""Human-readable byte counts.

Sizes are rendered with decimal (1000-based) units, the convention file
browsers use for file sizes. The output is display text only and is never
parsed back or compared.
"""

_UNITS: tuple[tuple[str, int], ...] = (
    ("KB", 0),
    ("MB", 1),
    ("GB", 2),
    ("TB", 2),
)


def format_bytes(size_bytes: int) -> str:
    """Format a byte count with an adaptive KB/MB/GB/TB unit.

    KB values carry no decimals, MB one, GB and TB two. Zero renders as
    ``"0 KB"``; anything non-zero below one kilobyte rounds up to ``"1 KB"``.

    Args:
        size_bytes: Number of bytes (negative values are treated as zero).

    Returns:
        Formatted size such as ``"512 KB"``, ``"10.5 MB"`` or ``"1.25 GB"``.
    """
    if size_bytes <= 0:
        return "0 KB"

    value = max(size_bytes / 1000, 1.0)
    for unit, decimals in _UNITS[:-1]:
        # Promote when rounding would print "1000 KB" or "1000.0 MB"
        if round(value, decimals) < 1000:
            return f"{value:.{decimals}f} {unit}"
        value /= 1000

    unit, decimals = _UNITS[-1]
    return f"{value:.{decimals}f} {unit}"
