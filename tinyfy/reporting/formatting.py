_KILOBYTE = 1024
_MEGABYTE = 1024 * 1024
_SMALL_BYTES = 100


def format_bytes(size: int) -> str:
    """Format a byte count for display.

    Counts under 100 bytes are shown as-is; larger counts use one decimal
    of KB or MB, so 600 bytes reads ``0.6 KB``.
    """
    if size == 0:
        return "0 Bytes"
    if abs(size) < _SMALL_BYTES:
        return f"{size} B"
    if abs(size) < _MEGABYTE:
        return f"{size / _KILOBYTE:.1f} KB"
    return f"{size / _MEGABYTE:.1f} MB"
