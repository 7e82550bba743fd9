"""Duration parsing for the scan interval setting."""

import re


class DurationParseError(ValueError):
    """Raised when a duration string cannot be parsed."""

    pass


_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(duration_str: str) -> int:
    """
    Parse a duration string to seconds.

    Accepts compact human-readable values ("30m", "12h", "1d", "1h30m") and
    ISO-8601 durations ("PT30M", "PT12H", "P1D").

    Raises:
        DurationParseError: If the duration string is invalid or zero

    Examples:
        >>> parse_duration("24h")
        86400
        >>> parse_duration("P1D")
        86400
    """
    value = duration_str.strip()
    if not value:
        raise DurationParseError("Duration string cannot be empty")

    if value.upper().startswith("P"):
        seconds = _parse_iso8601(value.upper())
    else:
        seconds = _parse_compact(value.lower())

    if seconds == 0:
        raise DurationParseError(f"Duration cannot be zero: '{duration_str}'")
    return seconds


def _parse_iso8601(value: str) -> int:
    match = re.match(
        r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?)?$", value
    )
    if not match or value in ("P", "PT"):
        raise DurationParseError(
            f"Invalid ISO-8601 duration: '{value}'. Expected e.g. 'P1D', 'PT12H', 'PT30M'"
        )
    days, hours, minutes, seconds = (int(g) if g else 0 for g in match.groups())
    return days * 86400 + hours * 3600 + minutes * 60 + seconds


def _parse_compact(value: str) -> int:
    pairs = re.findall(r"(\d+)\s*([smhd])", value)
    if not pairs:
        raise DurationParseError(
            f"Invalid duration: '{value}'. Expected e.g. '30m', '12h', '1d' or '1h30m'"
        )

    # Reject leftovers such as "12hours" or "1x"
    if "".join(f"{num}{unit}" for num, unit in pairs) != re.sub(r"\s+", "", value):
        raise DurationParseError(
            f"Invalid characters in duration: '{value}'. Use digits with s, m, h or d"
        )

    return sum(int(num) * _UNIT_SECONDS[unit] for num, unit in pairs)


def validate_duration_range(
    duration_seconds: int,
    min_seconds: int = 300,
    max_seconds: int = 7 * 86400,
) -> None:
    """
    Check that a scan interval lies between five minutes and seven days.

    Raises:
        DurationParseError: If the duration is outside the allowed range
    """
    if duration_seconds < min_seconds:
        raise DurationParseError(
            f"Scan interval too short: {describe_seconds(duration_seconds)}. "
            f"Minimum is {describe_seconds(min_seconds)}."
        )
    if duration_seconds > max_seconds:
        raise DurationParseError(
            f"Scan interval too long: {describe_seconds(duration_seconds)}. "
            f"Maximum is {describe_seconds(max_seconds)}."
        )


def describe_seconds(seconds: int) -> str:
    """Render a second count as "15 minutes", "1 hour", "2 days" and so on."""
    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if seconds >= size:
            count = seconds // size
            return f"{count} {unit}{'s' if count != 1 else ''}"
    return f"{seconds} second{'s' if seconds != 1 else ''}"
