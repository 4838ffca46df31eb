from decimal import ROUND_HALF_UP, Decimal

from errors import InsufficientData
from models import BestVideo, ChannelDataset, Metrics, VideoBreakdownEntry, VideoRecord

SECONDS_PER_DAY = 86400


def _fixed(value: float, places: int) -> Decimal:
    """Round half-up on the exact binary value, like fixed-point formatting."""
    return Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def _percent(part: int, whole: int) -> float:
    return float(_fixed(part / whole * 100, 2)) if whole > 0 else 0.0


def _mean_views(videos: list[VideoRecord]) -> float:
    return sum(v.stats.view_count for v in videos) / len(videos)


def _upload_frequency(videos: list[VideoRecord]) -> float:
    """Videos per week across the span between the oldest and newest upload."""
    dates = sorted((v.published_at for v in videos), reverse=True)
    days = (dates[0] - dates[-1]).total_seconds() / SECONDS_PER_DAY
    if days <= 0:
        return 0.0
    return float(_fixed(len(videos) / days * 7, 1))


def _views_trend(videos: list[VideoRecord]) -> float:
    # videos are newest-first, so the first half is the recent one
    midpoint = len(videos) // 2
    recent, older = videos[:midpoint], videos[midpoint:]
    if not recent or not older:
        return 0.0
    older_avg = _mean_views(older)
    if older_avg <= 0:
        return 0.0
    return float(_fixed((_mean_views(recent) - older_avg) / older_avg * 100, 1))


def compute_metrics(dataset: ChannelDataset) -> Metrics:
    videos = list(dataset.videos)
    if not videos:
        raise InsufficientData("No videos found for this channel")
    count = len(videos)

    total_views = sum(v.stats.view_count for v in videos)
    total_likes = sum(v.stats.like_count for v in videos)
    total_comments = sum(v.stats.comment_count for v in videos)

    best = videos[0]
    for video in videos[1:]:
        if video.stats.view_count > best.stats.view_count:
            best = video

    with_transcript = sum(1 for v in videos if v.has_transcript)
    channel = dataset.channel_stats

    return Metrics(
        videos_analyzed=count,
        comments_processed=dataset.total_comments,
        total_views=total_views,
        avg_views=int(_fixed(total_views / count, 0)),
        views_trend=_views_trend(videos),
        total_likes=total_likes,
        avg_likes=int(_fixed(total_likes / count, 0)),
        engagement_rate=_percent(total_likes, total_views),
        total_comments=total_comments,
        avg_comments=int(_fixed(total_comments / count, 0)),
        comment_rate=_percent(total_comments, total_views),
        best_performing_video=BestVideo(
            title=best.title,
            views=best.stats.view_count,
            likes=best.stats.like_count,
        ),
        upload_frequency=_upload_frequency(videos),
        transcript_availability=int(_fixed(with_transcript / count * 100, 0)),
        subscriber_count=channel.subscriber_count,
        total_channel_views=channel.total_views,
        total_channel_videos=channel.total_video_count,
    )


def build_video_breakdown(videos) -> list[VideoBreakdownEntry]:
    """Per-video summary rows, most viewed first (ties keep input order)."""
    entries = []
    for v in videos:
        views = v.stats.view_count
        rate = f"{_fixed(v.stats.like_count / views * 100, 2)}" if views > 0 else "0.00"
        entries.append(VideoBreakdownEntry(
            title=v.title,
            published_at=v.published_at,
            views=views,
            likes=v.stats.like_count,
            comments=v.stats.comment_count,
            engagement_rate=rate,
            has_transcript=v.has_transcript,
            comment_count=len(v.comments),
        ))
    return sorted(entries, key=lambda e: e.views, reverse=True)
