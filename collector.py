import logging
from concurrent.futures import ThreadPoolExecutor

from errors import ChannelNotFound, DataUnavailable
from models import ChannelDataset, VideoRecord

logger = logging.getLogger(__name__)

VIDEO_WINDOW = 10
MAX_COMMENTS = 50


def normalize_handle(handle: str) -> str:
    return handle.strip().lstrip("@").strip()


def _fetch_transcript(provider, video_id: str) -> str | None:
    try:
        return provider.get_transcript(video_id)
    except Exception as e:
        logger.warning("No transcript available for video %s: %s", video_id, e)
        return None


def _fetch_comments(provider, video_id: str) -> list:
    try:
        return provider.get_top_comments(video_id, MAX_COMMENTS)
    except Exception as e:
        logger.warning("Could not fetch comments for video %s: %s", video_id, e)
        return []


def collect_channel_data(channel_handle: str, provider, max_workers: int = 8) -> ChannelDataset:
    """
    Gather channel stats and the latest videos with their stats, transcripts and top comments.

    Transcript and comment failures degrade to empty values; a failed statistics
    fetch aborts the whole collection with DataUnavailable.
    """
    query = normalize_handle(channel_handle)
    if not query:
        raise ChannelNotFound("Channel handle is empty")

    try:
        channel_id = provider.find_channel_id(query)
    except Exception as e:
        raise DataUnavailable(f"Error finding channel: {e}") from e
    if not channel_id:
        raise ChannelNotFound(f"Channel not found: {channel_handle}")

    try:
        channel_stats = provider.get_channel_stats(channel_id)
    except Exception as e:
        raise DataUnavailable(f"Error fetching channel stats: {e}") from e

    try:
        summaries = provider.get_latest_videos(channel_id, VIDEO_WINDOW)
    except Exception as e:
        raise DataUnavailable(f"Error fetching videos: {e}") from e

    # The trend metric reads the first half as "recent"
    summaries = sorted(summaries[:VIDEO_WINDOW], key=lambda s: s.published_at, reverse=True)
    logger.info("Found %d videos for channel %s", len(summaries), channel_id)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        pending = [
            (
                summary,
                executor.submit(provider.get_video_stats, summary.video_id),
                executor.submit(_fetch_transcript, provider, summary.video_id),
                executor.submit(_fetch_comments, provider, summary.video_id),
            )
            for summary in summaries
        ]

        videos = []
        for summary, stats_future, transcript_future, comments_future in pending:
            try:
                stats = stats_future.result()
            except Exception as e:
                raise DataUnavailable(
                    f"Error fetching video stats for {summary.video_id}: {e}"
                ) from e

            videos.append(VideoRecord(
                **summary.model_dump(),
                stats=stats,
                transcript=transcript_future.result(),
                comments=tuple(comments_future.result()),
            ))

    return ChannelDataset(
        channel_id=channel_id,
        channel_handle=channel_handle,
        channel_stats=channel_stats,
        videos=tuple(videos),
    )
