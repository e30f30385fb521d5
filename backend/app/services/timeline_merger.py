import logging
from typing import Iterable

from app.schemas.timeline import Timeline, TimelineEvent
from app.utils.time_format import format_time

logger = logging.getLogger(__name__)

TIMELINE_HEADER = "Timeline Analysis:\n\n"

NO_EVENTS_NOTE = (
    "No significant events detected in the video.\n"
    "This might be due to:\n"
    "- Video quality or length issues\n"
    "- Content not matching expected patterns\n"
    "- Processing limitations\n"
)

def merge_events(events: Iterable[TimelineEvent]) -> Timeline:
    """Orders events by time. Ties keep their input order (sorted() is stable)."""
    ordered = sorted(events, key=lambda e: e.time)
    logger.info(f"Total events detected: {len(ordered)}")
    return Timeline(events=tuple(ordered))

def render_event(event: TimelineEvent) -> str:
    return f"{format_time(event.time)}: {event.event} ({event.confidence}% confidence)\n"

def render_timeline(timeline: Timeline) -> str:
    """Renders the human readable report; an empty timeline gets an explanatory note."""
    if timeline.is_empty:
        logger.warning("No events detected in the video")
        return TIMELINE_HEADER + NO_EVENTS_NOTE
    return TIMELINE_HEADER + "".join(render_event(event) for event in timeline.events)
