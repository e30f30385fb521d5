from datetime import timedelta

import pytest

from app.schemas.annotations import LabelSegment, RawAnnotationResult, TimeOffset


@pytest.mark.parametrize("value, seconds", [
    (None, 0),
    ({}, 0),
    ({"seconds": "42"}, 42),
    ({"seconds": 7, "nanos": 900000000}, 7),
    ({"seconds": None, "nanos": None}, 0),
    ({"seconds": 2.75}, 2),
    ("12.500s", 12),
    ("3s", 3),
    ("not a duration", 0),
    (9.99, 9),
    (timedelta(seconds=61, milliseconds=400), 61),
    (-4, 0),
])
def test_time_offset_whole_seconds(value, seconds):
    assert TimeOffset.model_validate(value).whole_seconds == seconds


def test_duration_string_keeps_nanos():
    offset = TimeOffset.model_validate("1.25s")
    assert (offset.seconds, offset.nanos) == (1, 250000000)


def test_empty_result_has_no_categories():
    raw = RawAnnotationResult.model_validate({})
    assert raw.segment_label_annotations == []
    assert raw.object_annotations == []
    assert raw.person_detection_annotations == []
    assert raw.speech_transcriptions == []
    assert raw.shot_annotations == []


def test_null_categories_are_empty():
    raw = RawAnnotationResult.model_validate({
        "segmentLabelAnnotations": None,
        "shotAnnotations": None,
        "speechTranscriptions": [{"alternatives": None}],
    })
    assert raw.segment_label_annotations == []
    assert raw.shot_annotations == []
    assert raw.speech_transcriptions[0].alternatives == []


def test_unknown_fields_are_ignored():
    raw = RawAnnotationResult.model_validate({"explicitAnnotation": {"frames": []}, "inputUri": "/video.mp4"})
    assert raw.input_uri == "/video.mp4"


def test_label_segment_nested_and_flat_ranges():
    nested = LabelSegment.model_validate(
        {"segment": {"startTimeOffset": "2s", "endTimeOffset": "8s"}, "confidence": 0.5}
    )
    flat = LabelSegment.model_validate({"startTimeOffset": "2s", "endTimeOffset": "8s"})
    assert (nested.start_seconds, nested.end_seconds) == (2, 8)
    assert (flat.start_seconds, flat.end_seconds) == (2, 8)
    assert flat.confidence is None
