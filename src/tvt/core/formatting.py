"""Formatting utilities.

Pure functions for presenting media values to people. Used by the info
report and the progress renderer.
"""

from datetime import timedelta


def format_clock(duration: timedelta) -> str:
    """Format a duration as HH:MM:SS, truncating fractional seconds.

    Examples:
        >>> format_clock(timedelta(seconds=3725.9))
        '01:02:05'
    """
    total = max(int(duration.total_seconds()), 0)
    hours, rem = divmod(total, 3600)
    minutes, seconds = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_eta(seconds: float) -> str:
    """Format a remaining-time estimate compactly.

    Under a minute shows seconds ("42s"), under an hour shows minutes and
    seconds ("3m7s"), otherwise hours and minutes ("1h5m").
    """
    total = max(int(seconds), 0)
    if total < 60:
        return f"{total}s"
    if total < 3600:
        return f"{total // 60}m{total % 60}s"
    return f"{total // 3600}h{(total // 60) % 60}m"


def format_bytes(size: int) -> str:
    """Format a byte count with binary units (e.g., "1.5 MB").

    Examples:
        >>> format_bytes(512)
        '512 B'
        >>> format_bytes(1536)
        '1.5 KB'
    """
    if size < 1024:
        return f"{size} B"
    units = "KMGTPE"
    value = size / 1024
    exp = 0
    while value >= 1024 and exp < len(units) - 1:
        value /= 1024
        exp += 1
    return f"{value:.1f} {units[exp]}B"


def format_bitrate(bitrate: int) -> str:
    """Format bits per second with decimal units (e.g., "2.5 Mbps")."""
    if bitrate < 1000:
        return f"{bitrate} bps"
    units = "kMGTPE"
    value = bitrate / 1000
    exp = 0
    while value >= 1000 and exp < len(units) - 1:
        value /= 1000
        exp += 1
    return f"{value:.1f} {units[exp]}bps"


_CHANNEL_LAYOUTS = {
    1: "Mono",
    2: "Stereo",
    3: "2.1",
    4: "4.0 (Quad)",
    5: "5.0",
    6: "5.1 Surround",
    7: "6.1 Surround",
    8: "7.1 Surround",
}


def channel_layout_name(channels: int) -> str:
    """Descriptive layout for a channel count ("Stereo", "5.1 Surround")."""
    return _CHANNEL_LAYOUTS.get(channels, f"{channels} channels")
