from typing import Optional

def format_time(seconds: Optional[int]) -> str:
    """
    Formats a duration in whole seconds as MM:SS, or HH:MM:SS from one hour up.
    Negative or missing input is treated as 0.
    """
    total = max(int(seconds or 0), 0)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"
