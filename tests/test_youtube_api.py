"""Tests for transcript track selection in the YouTube data provider."""

from types import SimpleNamespace

import pytest

import youtube_api
from youtube_api import NoTranscriptFound, YouTubeDataProvider


class _MissingLanguage(NoTranscriptFound):
    def __init__(self):
        Exception.__init__(self, "no transcript in the requested languages")


class FakeTrack:
    def __init__(self, language_code, *texts):
        self.language_code = language_code
        self.texts = texts

    def fetch(self):
        return [SimpleNamespace(text=t) for t in self.texts]


class FakeTranscriptList:
    def __init__(self, *tracks):
        self.tracks = list(tracks)
        self.requested = []

    def __iter__(self):
        return iter(self.tracks)

    def find_transcript(self, language_codes):
        self.requested.append(tuple(language_codes))
        for track in self.tracks:
            if track.language_code in language_codes:
                return track
        raise _MissingLanguage()


@pytest.fixture
def transcripts(monkeypatch):
    """Install a transcript list that YouTubeTranscriptApi().list() will return."""
    holder = {}

    class FakeApi:
        def list(self, video_id):
            return holder["list"]

    monkeypatch.setattr(youtube_api, "YouTubeTranscriptApi", FakeApi)

    def install(*tracks):
        holder["list"] = FakeTranscriptList(*tracks)
        return holder["list"]

    return install


class TestGetTranscript:
    def test_prefers_english(self, transcripts):
        installed = transcripts(FakeTrack("de", "Hallo"), FakeTrack("en", "Hello", "world"))

        assert YouTubeDataProvider("key").get_transcript("vid") == "Hello world"
        assert installed.requested == [("en",)]

    def test_uses_first_track_in_other_language(self, transcripts):
        transcripts(FakeTrack("ru", "Привет", "мир"), FakeTrack("uk", "Привіт"))

        assert YouTubeDataProvider("key").get_transcript("vid") == "Привет мир"

    def test_no_tracks(self, transcripts):
        transcripts()

        assert YouTubeDataProvider("key").get_transcript("vid") is None

    def test_blank_track(self, transcripts):
        transcripts(FakeTrack("en", "  ", ""))

        assert YouTubeDataProvider("key").get_transcript("vid") is None
