def format_duration(seconds: float | None) -> str | None:
    """Format a duration in seconds as HH:MM:SS."""
    if seconds is None:
        return None

    total = int(round(seconds))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def pace_minutes_per_km(seconds: float | None, distance_km: float | None) -> float | None:
    """Completion time in minutes divided by distance in km."""
    if seconds is None or not distance_km or distance_km <= 0:
        return None
    return (seconds / 60) / distance_km


def format_pace(seconds: float | None, distance_km: float | None) -> str | None:
    """Format average pace as M:SS (per km)."""
    pace = pace_minutes_per_km(seconds, distance_km)
    if pace is None:
        return None

    total = int(round(pace * 60))
    minutes, secs = divmod(total, 60)
    return f"{minutes}:{secs:02d}"
