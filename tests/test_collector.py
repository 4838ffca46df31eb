"""Tests for gathering a channel's raw dataset from the data provider."""

from datetime import timedelta

import pytest

from collector import collect_channel_data, normalize_handle
from conftest import BASE_DATE, FakeProvider, make_comments, make_summary
from errors import ChannelNotFound, DataUnavailable
from models import VideoStats


def _provider(**kwargs):
    summaries = [make_summary(i) for i in range(3)]
    defaults = dict(
        videos=summaries,
        stats={f"vid{i}": VideoStats(view_count=100 * (i + 1), like_count=i) for i in range(3)},
        comments={"vid0": list(make_comments(4)), "vid2": list(make_comments(60))},
        transcripts={"vid1": "spoken words"},
    )
    defaults.update(kwargs)
    return FakeProvider(**defaults)


class TestNormalizeHandle:
    @pytest.mark.parametrize("raw,expected", [
        ("@creator", "creator"),
        ("creator", "creator"),
        ("  @creator ", "creator"),
        ("@", ""),
    ])
    def test_strips_marker(self, raw, expected):
        assert normalize_handle(raw) == expected


class TestCollectChannelData:
    def test_builds_dataset(self):
        provider = _provider()

        dataset = collect_channel_data("@creator", provider, max_workers=4)

        assert provider.queries == ["creator"]
        assert dataset.channel_id == "UC123"
        assert dataset.channel_handle == "@creator"
        assert dataset.channel_stats.subscriber_count == 1200
        assert [v.video_id for v in dataset.videos] == ["vid0", "vid1", "vid2"]
        assert [v.stats.view_count for v in dataset.videos] == [100, 200, 300]
        assert dataset.videos[1].transcript == "spoken words"
        assert dataset.videos[0].transcript is None

    def test_comment_totals_and_limit(self):
        dataset = collect_channel_data("creator", _provider())

        assert [len(v.comments) for v in dataset.videos] == [4, 0, 50]
        assert dataset.total_comments == 54
        assert dataset.total_videos_analyzed == 3

    def test_sorts_newest_first(self):
        videos = [
            make_summary(0, published_at=BASE_DATE - timedelta(days=5)),
            make_summary(1, published_at=BASE_DATE),
            make_summary(2, published_at=BASE_DATE - timedelta(days=1)),
        ]

        dataset = collect_channel_data("creator", _provider(videos=videos))

        assert [v.video_id for v in dataset.videos] == ["vid1", "vid2", "vid0"]

    def test_keeps_at_most_ten_videos(self):
        videos = [make_summary(i) for i in range(15)]

        dataset = collect_channel_data("creator", _provider(videos=videos))

        assert dataset.total_videos_analyzed == 10

    def test_channel_without_videos(self):
        dataset = collect_channel_data("creator", _provider(videos=[]))

        assert dataset.videos == ()
        assert dataset.total_comments == 0

    def test_unknown_channel(self):
        with pytest.raises(ChannelNotFound):
            collect_channel_data("nobody", _provider(channel_id=None))

    def test_empty_handle(self):
        with pytest.raises(ChannelNotFound):
            collect_channel_data(" @ ", _provider())

    def test_transcript_failure_is_not_fatal(self):
        dataset = collect_channel_data("creator", _provider(failing={("transcript", "vid1")}))

        assert dataset.videos[1].transcript is None
        assert dataset.total_videos_analyzed == 3

    def test_comment_failure_is_not_fatal(self):
        dataset = collect_channel_data("creator", _provider(failing={("comments", "vid0")}))

        assert dataset.videos[0].comments == ()
        assert dataset.total_comments == 50

    def test_video_stats_failure_is_fatal(self):
        with pytest.raises(DataUnavailable, match="vid2"):
            collect_channel_data("creator", _provider(failing={("stats", "vid2")}))

    @pytest.mark.parametrize("step", ["lookup", "channel_stats", "videos"])
    def test_essential_fetch_failure(self, step):
        with pytest.raises(DataUnavailable):
            collect_channel_data("creator", _provider(failing={step}))
