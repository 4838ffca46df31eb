class AnalysisError(Exception):
    """Base for failures that abort a channel analysis."""


class ChannelNotFound(AnalysisError):
    """The handle did not resolve to any channel."""


class DataUnavailable(AnalysisError):
    """An essential fetch (channel stats, video list or video stats) failed."""


class InsufficientData(AnalysisError):
    """The dataset has no videos to compute metrics from."""
