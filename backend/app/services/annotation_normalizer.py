import logging
from typing import Callable, List, Sequence, Tuple

from app.schemas.annotations import (
    LabelAnnotation,
    ObjectTrackingAnnotation,
    PersonDetectionAnnotation,
    RawAnnotationResult,
    SpeechTranscription,
    VideoSegment,
)
from app.schemas.timeline import TimelineEvent
from app.services.confidence import to_percent
from app.utils.time_format import format_time

logger = logging.getLogger(__name__)

SHOT_CONFIDENCE = 100

def normalize_labels(labels: Sequence[LabelAnnotation]) -> List[TimelineEvent]:
    """One event per label segment, placed at the segment start."""
    events = []
    for label in labels:
        logger.debug(f"Processing label: {label.description}")
        for segment in label.segments:
            events.append(TimelineEvent(
                time=segment.start_seconds,
                event=f"{label.description} detected (until {format_time(segment.end_seconds)})",
                confidence=to_percent(segment.confidence),
            ))
    return events

def normalize_objects(objects: Sequence[ObjectTrackingAnnotation]) -> List[TimelineEvent]:
    """One event per tracked frame."""
    events = []
    for obj in objects:
        logger.debug(f"Processing object: {obj.description}")
        for frame in obj.frames:
            events.append(TimelineEvent(
                time=frame.time_seconds,
                event=f"{obj.description} tracked",
                confidence=to_percent(frame.confidence),
            ))
    return events

def normalize_persons(persons: Sequence[PersonDetectionAnnotation]) -> List[TimelineEvent]:
    events = []
    for person in persons:
        for track in person.tracks:
            segment = track.segment or VideoSegment()
            events.append(TimelineEvent(
                time=segment.start_seconds,
                event=f"Person detected (until {format_time(segment.end_seconds)})",
                confidence=to_percent(track.confidence),
            ))
    return events

def normalize_speech(transcriptions: Sequence[SpeechTranscription]) -> List[TimelineEvent]:
    """
    One event per recognised word, each carrying the whole alternative's transcript
    and confidence. A sentence of N words therefore shows up N times in the timeline.
    """
    events = []
    for transcription in transcriptions:
        for alternative in transcription.alternatives:
            if not alternative.words:
                continue
            transcript = alternative.transcript or ""
            logger.debug(f"Processing speech: \"{transcript}\"")
            for word in alternative.words:
                events.append(TimelineEvent(
                    time=word.start_seconds,
                    event=f"Speech: \"{transcript}\"",
                    confidence=to_percent(alternative.confidence),
                ))
    return events

def normalize_shots(shots: Sequence[VideoSegment]) -> List[TimelineEvent]:
    return [
        TimelineEvent(
            time=shot.start_seconds,
            event=f"New scene detected (until {format_time(shot.end_seconds)})",
            confidence=SHOT_CONFIDENCE,
        )
        for shot in shots
    ]

# Processing order is part of the output contract: events sharing a timestamp
# keep this relative order after sorting.
CATEGORY_NORMALIZERS: Tuple[Tuple[str, Callable[[RawAnnotationResult], List[TimelineEvent]]], ...] = (
    ("labels", lambda raw: normalize_labels(raw.segment_label_annotations)),
    ("objects", lambda raw: normalize_objects(raw.object_annotations)),
    ("persons", lambda raw: normalize_persons(raw.person_detection_annotations)),
    ("speech", lambda raw: normalize_speech(raw.speech_transcriptions)),
    ("shots", lambda raw: normalize_shots(raw.shot_annotations)),
)

def normalize_annotations(raw: RawAnnotationResult) -> List[TimelineEvent]:
    """Normalizes every category present in the result, in the fixed category order."""
    events: List[TimelineEvent] = []
    for category, normalize in CATEGORY_NORMALIZERS:
        category_events = normalize(raw)
        if category_events:
            logger.info(f"Normalized {len(category_events)} {category} events")
        events.extend(category_events)
    return events
