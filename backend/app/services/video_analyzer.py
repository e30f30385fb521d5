import logging
from typing import Any, Callable, Dict, Optional, Protocol, Union

from app.core.config import settings
from app.core.exceptions import EmptyVideoError
from app.schemas.annotations import RawAnnotationResult
from app.schemas.timeline import AnalysisReport, LabelSummary
from app.services.annotation_normalizer import normalize_annotations
from app.services.confidence import aggregate_confidence, first_segment_confidence, to_percent
from app.services.timeline_merger import merge_events, render_timeline

logger = logging.getLogger(__name__)


class AnnotationProvider(Protocol):
    """Submits video bytes for analysis and resolves to the annotation result."""

    def annotate(self, video_content: bytes) -> RawAnnotationResult:
        ...


ReductionStrategy = Callable[[RawAnnotationResult, float], AnalysisReport]


def reduce_to_timeline(raw: RawAnnotationResult, threshold: float) -> AnalysisReport:
    """Full report: every detection across all categories on one timeline."""
    timeline = merge_events(normalize_annotations(raw))
    return AnalysisReport(
        analysis=render_timeline(timeline),
        confidence=aggregate_confidence(raw.segment_label_annotations),
    )


def reduce_to_summary(raw: RawAnnotationResult, threshold: float) -> AnalysisReport:
    """Short report: a count plus the labels scoring strictly above the threshold."""
    labels = [
        LabelSummary(
            description=label.description,
            confidence=to_percent(first_segment_confidence(label)),
        )
        for label in raw.segment_label_annotations
        if first_segment_confidence(label) > threshold
    ]
    return AnalysisReport(
        analysis=f"Detected {len(labels)} relevant objects/actions",
        labels=labels,
        confidence=aggregate_confidence(raw.segment_label_annotations),
    )


REDUCTION_STRATEGIES: Dict[str, ReductionStrategy] = {
    "timeline": reduce_to_timeline,
    "summary": reduce_to_summary,
}


class VideoAnalyzer:
    """
    Turns a video analysis result into an AnalysisReport.

    The analyzer holds no per-request state, so one instance can serve concurrent
    requests. The provider is only needed for `analyze_video`; `analyze` works on
    an already resolved result.
    """

    def __init__(
        self,
        provider: Optional[AnnotationProvider] = None,
        mode: Optional[str] = None,
        high_confidence_threshold: Optional[float] = None,
    ) -> None:
        self.provider = provider
        self.mode = mode or settings.ANALYSIS_MODE
        self.high_confidence_threshold = (
            settings.HIGH_CONFIDENCE_THRESHOLD
            if high_confidence_threshold is None
            else high_confidence_threshold
        )
        self._resolve_strategy(self.mode)

    @staticmethod
    def _resolve_strategy(mode: str) -> ReductionStrategy:
        try:
            return REDUCTION_STRATEGIES[mode]
        except KeyError:
            raise ValueError(
                f"Unknown analysis mode '{mode}'. Expected one of: {', '.join(REDUCTION_STRATEGIES)}"
            ) from None

    def analyze(
        self,
        raw: Union[RawAnnotationResult, Dict[str, Any]],
        query: Optional[str] = None,
        mode: Optional[str] = None,
    ) -> AnalysisReport:
        """
        Reduces a resolved annotation result.

        Args:
            raw: The provider's annotation result, as a model or its JSON dict.
                Any category may be missing.
            query: Free text from the client. Accepted and logged, but it does not
                change the reduction yet.
            mode: "timeline" or "summary"; defaults to the analyzer's mode.
        """
        mode = mode or self.mode
        strategy = self._resolve_strategy(mode)
        if isinstance(raw, dict):
            raw = RawAnnotationResult.model_validate(raw)
        if query:
            logger.info(f"Analysis query received: {query!r}")

        if raw.segment is not None:
            logger.info(f"Processing video segment ending at {raw.segment.end_seconds}s")

        report = strategy(raw, self.high_confidence_threshold)
        logger.info(f"Analysis complete (mode={mode}, confidence={report.confidence}%)")
        return report

    def analyze_video(
        self,
        video_content: bytes,
        query: Optional[str] = None,
        mode: Optional[str] = None,
    ) -> AnalysisReport:
        """Submits the video to the provider, waits for it, and reduces the result."""
        if self.provider is None:
            raise RuntimeError("VideoAnalyzer has no annotation provider configured.")
        # Fail on a bad mode before paying for a provider call.
        self._resolve_strategy(mode or self.mode)
        if not video_content:
            raise EmptyVideoError("Video content is empty")

        raw = self.provider.annotate(video_content)
        return self.analyze(raw, query=query, mode=mode)
