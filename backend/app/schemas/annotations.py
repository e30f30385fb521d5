"""
Pydantic models for the raw payload returned by the video analysis provider.

Every field is optional. The provider (and its different serializations) may omit
any category or any nested value, and the reduction pipeline treats a missing
value as "no data" rather than an error. Field names are accepted both in the
provider's camelCase JSON form and as snake_case proto field names.
"""
import re
from datetime import timedelta
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

_DURATION_STRING = re.compile(r"^\s*(-?\d+)(?:\.(\d{1,9}))?s?\s*$")


class AnnotationModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def _null_lists(cls, value: Any, info) -> Any:
        # Explicit nulls for repeated fields are treated the same as absent ones.
        field = cls.model_fields.get(info.field_name)
        if value is None and field is not None and isinstance(field.default, list):
            return []
        return value


def _split_seconds(value: float) -> dict:
    whole = int(value)
    return {"seconds": whole, "nanos": int(round((value - whole) * 1e9))}


class TimeOffset(AnnotationModel):
    """A protobuf Duration. Only whole seconds are used by the pipeline."""

    seconds: int = 0
    nanos: int = 0

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, timedelta):
            return _split_seconds(value.total_seconds())
        if isinstance(value, (int, float)):
            return _split_seconds(value)
        if isinstance(value, str):
            match = _DURATION_STRING.match(value)
            if not match:
                return {}
            fraction = (match.group(2) or "").ljust(9, "0")
            return {"seconds": int(match.group(1)), "nanos": int(fraction)}
        if isinstance(value, dict):
            # The JS/JSON clients encode int64 seconds as strings.
            seconds = value.get("seconds") or 0
            if isinstance(seconds, float):
                return _split_seconds(seconds)
            return {"seconds": seconds, "nanos": value.get("nanos") or 0}
        return value

    @property
    def whole_seconds(self) -> int:
        return max(self.seconds, 0)


class VideoSegment(AnnotationModel):
    start_time_offset: Optional[TimeOffset] = None
    end_time_offset: Optional[TimeOffset] = None

    @property
    def start_seconds(self) -> int:
        return self.start_time_offset.whole_seconds if self.start_time_offset else 0

    @property
    def end_seconds(self) -> int:
        return self.end_time_offset.whole_seconds if self.end_time_offset else 0


class Entity(AnnotationModel):
    entity_id: Optional[str] = None
    description: Optional[str] = None
    language_code: Optional[str] = None


class LabelSegment(VideoSegment):
    """
    A time range for a label. The provider nests the range under ``segment``;
    flattened serializations put the offsets directly on the label segment.
    """

    segment: Optional[VideoSegment] = None
    confidence: Optional[float] = None

    @property
    def start_seconds(self) -> int:
        if self.segment is not None:
            return self.segment.start_seconds
        return super().start_seconds

    @property
    def end_seconds(self) -> int:
        if self.segment is not None:
            return self.segment.end_seconds
        return super().end_seconds


class LabelAnnotation(AnnotationModel):
    entity: Optional[Entity] = None
    category_entities: List[Entity] = []
    segments: List[LabelSegment] = []

    @property
    def description(self) -> str:
        return (self.entity.description if self.entity else None) or ""


class ObjectTrackingFrame(AnnotationModel):
    time_offset: Optional[TimeOffset] = None
    confidence: Optional[float] = None

    @property
    def time_seconds(self) -> int:
        return self.time_offset.whole_seconds if self.time_offset else 0


class ObjectTrackingAnnotation(AnnotationModel):
    entity: Optional[Entity] = None
    segment: Optional[VideoSegment] = None
    confidence: Optional[float] = None
    frames: List[ObjectTrackingFrame] = []

    @property
    def description(self) -> str:
        return (self.entity.description if self.entity else None) or ""


class Track(AnnotationModel):
    segment: Optional[VideoSegment] = None
    confidence: Optional[float] = None


class PersonDetectionAnnotation(AnnotationModel):
    tracks: List[Track] = []


class WordInfo(AnnotationModel):
    start_time: Optional[TimeOffset] = None
    end_time: Optional[TimeOffset] = None
    word: Optional[str] = None
    confidence: Optional[float] = None

    @property
    def start_seconds(self) -> int:
        return self.start_time.whole_seconds if self.start_time else 0


class SpeechRecognitionAlternative(AnnotationModel):
    transcript: Optional[str] = None
    confidence: Optional[float] = None
    words: List[WordInfo] = []


class SpeechTranscription(AnnotationModel):
    alternatives: List[SpeechRecognitionAlternative] = []
    language_code: Optional[str] = None


class RawAnnotationResult(AnnotationModel):
    """One resolved annotation result for a single video."""

    input_uri: Optional[str] = None
    segment: Optional[VideoSegment] = None
    segment_label_annotations: List[LabelAnnotation] = []
    object_annotations: List[ObjectTrackingAnnotation] = []
    person_detection_annotations: List[PersonDetectionAnnotation] = []
    speech_transcriptions: List[SpeechTranscription] = []
    shot_annotations: List[VideoSegment] = []
