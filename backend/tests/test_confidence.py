import pytest

from app.schemas.annotations import LabelAnnotation
from app.services.confidence import aggregate_confidence, to_percent


def label(*confidences):
    return LabelAnnotation.model_validate({
        "entity": {"description": "thing"},
        "segments": [{"confidence": c} for c in confidences],
    })


@pytest.mark.parametrize("fraction, expected", [
    (None, 0),
    (0, 0),
    (0.125, 13),
    (0.375, 38),
    (0.8567, 86),
    (1.0, 100),
    (1.7, 100),
    (-0.2, 0),
    (float("nan"), 0),
])
def test_to_percent(fraction, expected):
    assert to_percent(fraction) == expected


def test_no_labels_is_zero():
    assert aggregate_confidence([]) == 0


def test_single_label_rounds():
    assert aggregate_confidence([label(0.8567)]) == 86


def test_only_first_segment_counts():
    assert aggregate_confidence([label(0.9, 0.1, 0.1)]) == 90


def test_mean_across_labels():
    assert aggregate_confidence([label(0.9), label(0.6)]) == 75


def test_label_without_segments_counts_as_zero():
    assert aggregate_confidence([label(0.8), label()]) == 40


def test_missing_segment_confidence_is_zero():
    assert aggregate_confidence([label(None), label(1.0)]) == 50
