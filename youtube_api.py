import html
import threading

from googleapiclient.discovery import build
from youtube_transcript_api import NoTranscriptFound, YouTubeTranscriptApi

from config import YOUTUBE_API_KEY
from models import ChannelStats, Comment, VideoStats, VideoSummary


def _build_client(api_key: str):
    return build("youtube", "v3", developerKey=api_key, cache_discovery=False)


def _optional_int(value) -> int | None:
    return int(value) if value is not None else None


class YouTubeDataProvider:
    """
    Read-only access to the YouTube Data API v3 plus public transcripts.
    Each worker thread gets its own discovery client since httplib2 is not thread-safe.
    """

    def __init__(self, api_key: str | None = None):
        self.api_key = api_key or YOUTUBE_API_KEY
        self._local = threading.local()

    @property
    def youtube(self):
        client = getattr(self._local, "client", None)
        if client is None:
            client = self._local.client = _build_client(self.api_key)
        return client

    def find_channel_id(self, query: str) -> str | None:
        response = self.youtube.search().list(
            part="snippet",
            q=query,
            type="channel",
            maxResults=1,
        ).execute()

        items = response.get("items", [])
        if not items:
            return None
        return items[0]["snippet"]["channelId"]

    def get_channel_stats(self, channel_id: str) -> ChannelStats:
        response = self.youtube.channels().list(
            part="statistics,snippet",
            id=channel_id,
        ).execute()

        items = response.get("items", [])
        if not items:
            raise LookupError(f"No channel data returned for {channel_id}")

        snippet = items[0].get("snippet", {})
        stats = items[0].get("statistics", {})
        subscribers = None if stats.get("hiddenSubscriberCount") else stats.get("subscriberCount")
        return ChannelStats(
            id=channel_id,
            handle=snippet.get("customUrl"),
            name=snippet.get("title", ""),
            description=snippet.get("description", ""),
            subscriber_count=_optional_int(subscribers),
            total_views=_optional_int(stats.get("viewCount")),
            total_video_count=_optional_int(stats.get("videoCount")),
            created_at=snippet.get("publishedAt"),
        )

    def get_latest_videos(self, channel_id: str, max_results: int = 10) -> list[VideoSummary]:
        response = self.youtube.search().list(
            part="snippet",
            channelId=channel_id,
            order="date",
            type="video",
            maxResults=max_results,
        ).execute()

        videos = []
        for item in response.get("items", []):
            snippet = item["snippet"]
            videos.append(VideoSummary(
                video_id=item["id"]["videoId"],
                title=html.unescape(snippet.get("title", "")),
                description=html.unescape(snippet.get("description", "")),
                published_at=snippet["publishedAt"],
                thumbnails=snippet.get("thumbnails", {}),
            ))
        return videos

    def get_video_stats(self, video_id: str) -> VideoStats:
        response = self.youtube.videos().list(
            part="statistics,contentDetails",
            id=video_id,
        ).execute()

        items = response.get("items", [])
        if not items:
            raise LookupError(f"No statistics returned for video {video_id}")

        stats = items[0].get("statistics", {})
        return VideoStats(
            view_count=int(stats.get("viewCount", 0)),
            like_count=int(stats.get("likeCount", 0)),
            comment_count=int(stats.get("commentCount", 0)),
            duration=items[0].get("contentDetails", {}).get("duration", ""),
        )

    def get_top_comments(self, video_id: str, max_results: int = 50) -> list[Comment]:
        response = self.youtube.commentThreads().list(
            part="snippet",
            videoId=video_id,
            order="relevance",
            maxResults=max_results,
        ).execute()

        comments = []
        for item in response.get("items", []):
            top = item["snippet"]["topLevelComment"]["snippet"]
            comments.append(Comment(
                text=top.get("textDisplay", ""),
                like_count=int(top.get("likeCount", 0)),
                author=top.get("authorDisplayName", ""),
                published_at=top.get("publishedAt"),
            ))
        return comments

    def get_transcript(self, video_id: str, preferred_langs: tuple[str, ...] = ("en",)) -> str | None:
        """Preferred-language captions if present, otherwise the first track the video offers."""
        transcripts = YouTubeTranscriptApi().list(video_id)
        try:
            transcript = transcripts.find_transcript(preferred_langs)
        except NoTranscriptFound:
            transcript = next(iter(transcripts), None)
            if transcript is None:
                return None

        fetched = transcript.fetch()
        text = " ".join(snippet.text for snippet in fetched).strip()
        return text or None
