import logging
import math
from typing import Optional, Sequence

from app.schemas.annotations import LabelAnnotation

logger = logging.getLogger(__name__)

def to_percent(fraction: Optional[float]) -> int:
    """
    Converts a confidence fraction in [0, 1] to an integer percentage.
    Halves round up; missing values count as 0 and the result is clamped to [0, 100].
    """
    if fraction is None or math.isnan(fraction):
        return 0
    percent = math.floor(fraction * 100 + 0.5)
    return min(max(percent, 0), 100)

def first_segment_confidence(label: LabelAnnotation) -> float:
    """Confidence of the label's first segment; 0 when it has none."""
    if not label.segments:
        return 0.0
    return label.segments[0].confidence or 0.0

def aggregate_confidence(labels: Sequence[LabelAnnotation]) -> int:
    """
    Overall confidence for a video, derived only from label annotations.

    Each label contributes the confidence of its *first* segment, not an average of
    all its segments. Existing clients compare scores across releases, so this
    approximation is kept as is.
    """
    if not labels:
        return 0
    total = sum(first_segment_confidence(label) for label in labels)
    overall = to_percent(total / len(labels))
    logger.debug(f"Aggregated confidence over {len(labels)} labels: {overall}%")
    return overall
