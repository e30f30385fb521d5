class AnalysisError(Exception):
    """Base class for failures surfaced to the caller as 'Analysis failed'."""


class ProviderError(AnalysisError):
    """The video analysis provider failed or returned an unusable response."""


class EmptyVideoError(AnalysisError):
    """The uploaded video carried no content."""
