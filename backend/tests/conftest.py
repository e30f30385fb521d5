import pytest

from app.schemas.annotations import RawAnnotationResult


@pytest.fixture
def drone_and_shot():
    """One label and one shot, both starting at 0s (provider camelCase JSON)."""
    return {
        "segmentLabelAnnotations": [
            {
                "entity": {"description": "Drone"},
                "segments": [
                    {
                        "segment": {
                            "startTimeOffset": {"seconds": "0"},
                            "endTimeOffset": {"seconds": "5"},
                        },
                        "confidence": 0.9,
                    }
                ],
            }
        ],
        "shotAnnotations": [
            {"startTimeOffset": {"seconds": "0"}, "endTimeOffset": {"seconds": "5"}}
        ],
    }


@pytest.fixture
def full_result():
    """Every category, with overlapping timestamps."""
    return RawAnnotationResult.model_validate({
        "segment_label_annotations": [
            {
                "entity": {"description": "Car"},
                "segments": [
                    {"segment": {"start_time_offset": "3s", "end_time_offset": "9s"}, "confidence": 0.8},
                    {"segment": {"start_time_offset": "12s", "end_time_offset": "15s"}, "confidence": 0.4},
                ],
            },
            {
                "entity": {"description": "Road"},
                "segments": [
                    {"segment": {"start_time_offset": "0s", "end_time_offset": "20s"}, "confidence": 0.6},
                ],
            },
        ],
        "object_annotations": [
            {
                "entity": {"description": "bicycle"},
                "confidence": 0.7,
                "frames": [
                    {"time_offset": "3.400s", "confidence": 0.75},
                    {"time_offset": "4s", "confidence": 0.5},
                ],
            }
        ],
        "person_detection_annotations": [
            {"tracks": [{"segment": {"start_time_offset": "3s", "end_time_offset": "65s"}, "confidence": 0.95}]}
        ],
        "speech_transcriptions": [
            {
                "alternatives": [
                    {
                        "transcript": "hello there",
                        "confidence": 0.88,
                        "words": [
                            {"start_time": "3s", "word": "hello"},
                            {"start_time": "4s", "word": "there"},
                        ],
                    }
                ]
            }
        ],
        "shot_annotations": [
            {"start_time_offset": "0s", "end_time_offset": "3s"},
            {"start_time_offset": "3s", "end_time_offset": "20s"},
        ],
    })
