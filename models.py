from datetime import datetime

from pydantic import BaseModel, ConfigDict, computed_field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _FrozenModel(_Model):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ChannelStats(_FrozenModel):
    id: str
    handle: str | None = None
    name: str = ""
    description: str = ""
    subscriber_count: int | None = None
    total_views: int | None = None
    total_video_count: int | None = None
    created_at: datetime | None = None


class VideoStats(_FrozenModel):
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    duration: str = ""


class Comment(_FrozenModel):
    text: str
    like_count: int = 0
    author: str = ""
    published_at: datetime | None = None


class VideoSummary(_FrozenModel):
    video_id: str
    title: str
    description: str = ""
    published_at: datetime
    thumbnails: dict = {}


class VideoRecord(VideoSummary):
    stats: VideoStats = VideoStats()
    transcript: str | None = None
    comments: tuple[Comment, ...] = ()

    @field_validator("transcript")
    @classmethod
    def _blank_transcript_is_missing(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @property
    def has_transcript(self) -> bool:
        return self.transcript is not None


class ChannelDataset(_FrozenModel):
    """Everything gathered for one channel; videos are ordered newest-first."""

    channel_id: str
    channel_handle: str
    channel_stats: ChannelStats
    videos: tuple[VideoRecord, ...] = ()

    @model_validator(mode="after")
    def _check_newest_first(self):
        for newer, older in zip(self.videos, self.videos[1:]):
            if newer.published_at < older.published_at:
                raise ValueError(
                    f"videos must be ordered newest-first: {older.video_id} "
                    f"was published after {newer.video_id}"
                )
        return self

    @computed_field
    @property
    def total_videos_analyzed(self) -> int:
        return len(self.videos)

    @computed_field
    @property
    def total_comments(self) -> int:
        return sum(len(v.comments) for v in self.videos)


# Report shapes


class Feature(_Model):
    feature: str
    category: str
    confidence: str


class Complaint(_Model):
    text: str
    frequency: str


class SentimentGap(_Model):
    complaints: list[Complaint]
    most_requested_feature: str


class HookAnalysis(_Model):
    primary_hook: str
    secondary_hooks: list[str] = []
    strategy: str


class Keyword(_Model):
    keyword: str
    importance: str


class ReportMetadata(_Model):
    videos_analyzed: int
    comments_analyzed: int


class Report(_Model):
    channel_handle: str
    analyzed_at: datetime
    features: list[Feature]
    sentiment: SentimentGap
    hooks: HookAnalysis
    keywords: list[Keyword]
    metadata: ReportMetadata


# Metrics shapes


class BestVideo(_Model):
    title: str
    views: int
    likes: int


class Metrics(_Model):
    videos_analyzed: int
    comments_processed: int
    total_views: int
    avg_views: int
    views_trend: float
    total_likes: int
    avg_likes: int
    engagement_rate: float
    total_comments: int
    avg_comments: int
    comment_rate: float
    best_performing_video: BestVideo
    upload_frequency: float
    transcript_availability: int
    subscriber_count: int | None = None
    total_channel_views: int | None = None
    total_channel_videos: int | None = None


class VideoBreakdownEntry(_Model):
    title: str
    published_at: datetime
    views: int
    likes: int
    comments: int
    engagement_rate: str
    has_transcript: bool
    comment_count: int


class ChannelAnalysis(_Model):
    report: Report
    metrics: Metrics
    channel_info: ChannelStats
    video_breakdown: list[VideoBreakdownEntry]

    def to_payload(self) -> dict:
        """Flatten into the JSON body returned to callers."""
        data = self.report.model_dump(mode="json", by_alias=True)
        data["metrics"] = self.metrics.model_dump(mode="json", by_alias=True)
        data["channelInfo"] = self.channel_info.model_dump(mode="json", by_alias=True)
        data["videoBreakdown"] = [
            entry.model_dump(mode="json", by_alias=True) for entry in self.video_breakdown
        ]
        return data
