from __future__ import annotations

from datetime import datetime


def make_run_id(now: datetime | None = None) -> str:
    return (now or datetime.now()).strftime("%Y%m%d_%H%M%S")


def safe_int(x, default: int = 0) -> int:
    try:
        return int(x)
    except Exception:
        return default


def format_count(n: int) -> str:
    """1234 -> '1,234' (en-US grouping)."""
    return f"{int(n):,}"


def format_duration(seconds: float) -> str:
    if seconds < 60:
        return f"{seconds:.1f}s"
    if seconds < 3600:
        mins = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{mins}m{secs:02d}s"
    hours = int(seconds // 3600)
    mins = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    return f"{hours}h{mins:02d}m{secs:02d}s"
