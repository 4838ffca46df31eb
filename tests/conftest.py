"""Shared factories and stand-ins for the YouTube provider and the text model."""

from datetime import datetime, timedelta, timezone

import pytest

from llm import TextGenerator
from models import ChannelDataset, ChannelStats, Comment, VideoRecord, VideoStats, VideoSummary

BASE_DATE = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


class StubGenerator(TextGenerator):
    """Returns canned completions (or raises) and records every prompt."""

    def __init__(self, *responses, error: Exception | None = None):
        self.responses = list(responses)
        self.error = error
        self.prompts = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.responses.pop(0) if self.responses else ""


class FakeProvider:
    """In-memory data provider keyed by video id."""

    def __init__(self, channel_id="UC123", videos=None, stats=None, comments=None,
                 transcripts=None, failing=()):
        self.channel_id = channel_id
        self.videos = videos or []
        self.stats = stats or {}
        self.comments = comments or {}
        self.transcripts = transcripts or {}
        self.failing = set(failing)
        self.queries = []

    def _maybe_fail(self, what, key=None):
        if what in self.failing or (what, key) in self.failing:
            raise RuntimeError(f"{what} unavailable")

    def find_channel_id(self, query):
        self.queries.append(query)
        self._maybe_fail("lookup")
        return self.channel_id

    def get_channel_stats(self, channel_id):
        self._maybe_fail("channel_stats")
        return ChannelStats(id=channel_id, handle="@creator", name="Creator", subscriber_count=1200)

    def get_latest_videos(self, channel_id, max_results=10):
        self._maybe_fail("videos")
        return self.videos[:max_results]

    def get_video_stats(self, video_id):
        self._maybe_fail("stats", video_id)
        return self.stats.get(video_id, VideoStats())

    def get_top_comments(self, video_id, max_results=50):
        self._maybe_fail("comments", video_id)
        return self.comments.get(video_id, [])[:max_results]

    def get_transcript(self, video_id):
        self._maybe_fail("transcript", video_id)
        return self.transcripts.get(video_id)


def make_comments(n, prefix="comment"):
    return tuple(Comment(text=f"{prefix} {i}", like_count=i) for i in range(n))


def make_video(index=0, views=0, likes=0, comment_count=0, title=None, description="",
               transcript=None, comments=(), published_at=None):
    return VideoRecord(
        video_id=f"vid{index}",
        title=title if title is not None else f"Video number {index}",
        description=description,
        published_at=published_at or BASE_DATE - timedelta(days=index),
        stats=VideoStats(view_count=views, like_count=likes, comment_count=comment_count),
        transcript=transcript,
        comments=tuple(comments),
    )


def make_summary(index, published_at=None, title=None):
    return VideoSummary(
        video_id=f"vid{index}",
        title=title or f"Video number {index}",
        published_at=published_at or BASE_DATE - timedelta(days=index),
    )


def make_dataset(videos=(), handle="@creator"):
    return ChannelDataset(
        channel_id="UC123",
        channel_handle=handle,
        channel_stats=ChannelStats(
            id="UC123",
            handle=handle,
            name="Creator",
            subscriber_count=1200,
            total_views=50_000,
            total_video_count=42,
        ),
        videos=tuple(videos),
    )


@pytest.fixture
def dataset():
    videos = [
        make_video(0, views=300, likes=30, comment_count=4, transcript="We review the newest gadget",
                   comments=make_comments(3)),
        make_video(1, views=100, likes=10, comment_count=2, comments=make_comments(3)),
    ]
    return make_dataset(videos)
