"""
Helper functions for formatting data into human-readable strings.
"""

from urllib.parse import unquote, urlsplit

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_size(bytes_size: float) -> str:
    """Formats a byte count for the summary panel (e.g., '145.3 MB')."""
    if bytes_size <= 0:
        return "0 B"
    for unit in SIZE_UNITS[:-1]:
        if bytes_size < 1024:
            break
        bytes_size /= 1024
    else:
        unit = SIZE_UNITS[-1]
    if unit == "B":
        return f"{int(bytes_size)} B"
    return f"{bytes_size:.1f} {unit}"


def format_duration(seconds: float) -> str:
    """
    Formats an elapsed time. Runs shorter than a minute keep one decimal
    ('4.2s'); longer ones are split into units ('1h 2m 5s').
    """
    if seconds < 60:
        return f"{max(seconds, 0):.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    units = [(hours, "h"), (minutes, "m"), (secs, "s")]
    return " ".join(f"{value}{unit}" for value, unit in units if value)


def filename_from_url(url: str, fallback: str = "download") -> str:
    """Returns the last path segment of a URL, without query or fragment."""
    path = urlsplit(url).path
    name = unquote(path.rstrip("/").rsplit("/", 1)[-1])
    return name or fallback
