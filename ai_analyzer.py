import json
import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from llm import TextGenerator
from models import (
    ChannelDataset,
    Complaint,
    Feature,
    HookAnalysis,
    Keyword,
    Report,
    ReportMetadata,
    SentimentGap,
    VideoRecord,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSCRIPT_BUDGET = 2000
COMMENT_BUDGET = 2000
TITLE_BUDGET = 1500
MIN_COMMENTS = 5
KEYWORD_STOPWORDS = {"video", "watch", "subscribe"}

FEATURES_PROMPT = """Find 5 key topics from these transcripts. Return JSON: [{{"feature":"name","category":"New","confidence":"high"}}]

{transcripts}"""

SENTIMENT_PROMPT = """Find common themes in comments. Return JSON: {{"complaints":[{{"text":"theme","frequency":"high"}}],"mostRequestedFeature":"feature"}}

{comments}"""

HOOKS_PROMPT = """What's the main emotional hook? Return JSON: {{"primaryHook":"hook","secondaryHooks":["h1"],"strategy":"desc"}}

Titles:
{titles}"""

_FEATURES = TypeAdapter(list[Feature])
_SENTIMENT = TypeAdapter(SentimentGap)
_HOOKS = TypeAdapter(HookAnalysis)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Fallback(Generic[T]):
    value: T
    reason: str


def extract_json(text: str, expected: type) -> Any:
    """Return the first well-formed JSON array (or object) embedded in *text*, else None."""
    opener = "[" if expected is list else "{"
    decoder = json.JSONDecoder()
    start = text.find(opener)
    while start != -1:
        try:
            value, _ = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            pass
        else:
            if isinstance(value, expected):
                return value
        start = text.find(opener, start + 1)
    return None


def _ask_model(generator: TextGenerator | None, prompt: str, adapter: TypeAdapter, expected: type):
    """Run one model round-trip; returns (parsed, None) or (None, reason)."""
    if generator is None:
        return None, "text generation is not configured"
    try:
        completion = generator.generate(prompt)
    except Exception as e:
        return None, f"model call failed: {e}"

    raw = extract_json(completion or "", expected)
    if raw is None:
        return None, f"no JSON {expected.__name__} in model output"
    try:
        return adapter.validate_python(raw), None
    except ValidationError as e:
        return None, f"unexpected shape in model output ({e.error_count()} errors)"


def _degraded(analysis: str, value: T, reason: str, level: int = logging.WARNING) -> Fallback[T]:
    logger.log(level, "%s analysis degraded to heuristic: %s", analysis, reason)
    return Fallback(value, reason)


# Features


def features_from_titles(videos: list[VideoRecord]) -> list[Feature]:
    seen = set()
    words = []
    for video in videos:
        for word in video.title.split():
            if len(word) > 5 and word not in seen:
                seen.add(word)
                words.append(word)
    return [Feature(feature=w, category="Detected", confidence="medium") for w in words[:5]]


def analyze_features(videos: list[VideoRecord], generator: TextGenerator | None) -> Ok | Fallback:
    transcripts = "\n\n".join(v.transcript for v in videos if v.transcript)
    if not transcripts:
        return _degraded("Feature", features_from_titles(videos), "no transcripts", logging.INFO)

    prompt = FEATURES_PROMPT.format(transcripts=transcripts[:TRANSCRIPT_BUDGET])
    features, reason = _ask_model(generator, prompt, _FEATURES, list)
    if features is None:
        return _degraded("Feature", features_from_titles(videos), reason)
    return Ok(features)


# Sentiment


def insufficient_sentiment() -> SentimentGap:
    return SentimentGap(
        complaints=[
            Complaint(text="Limited engagement data", frequency="medium"),
            Complaint(text="Low comment activity", frequency="low"),
            Complaint(text="Check community settings", frequency="low"),
        ],
        most_requested_feature="More data needed",
    )


def positive_sentiment() -> SentimentGap:
    return SentimentGap(
        complaints=[
            Complaint(text="Positive audience response", frequency="high"),
            Complaint(text="Strong engagement", frequency="medium"),
            Complaint(text="Active community", frequency="low"),
        ],
        most_requested_feature="Similar content",
    )


def analyze_sentiment(comments: list, generator: TextGenerator | None) -> Ok | Fallback:
    if len(comments) < MIN_COMMENTS:
        return _degraded(
            "Sentiment", insufficient_sentiment(), f"only {len(comments)} comments", logging.INFO
        )

    comment_text = "\n".join(c.text for c in comments)[:COMMENT_BUDGET]
    sentiment, reason = _ask_model(
        generator, SENTIMENT_PROMPT.format(comments=comment_text), _SENTIMENT, dict
    )
    if sentiment is None:
        return _degraded("Sentiment", positive_sentiment(), reason)

    while len(sentiment.complaints) < 3:
        sentiment.complaints.append(Complaint(text="Positive sentiment", frequency="low"))
    return Ok(sentiment)


# Hooks


def spectacle_hooks() -> HookAnalysis:
    return HookAnalysis(
        primary_hook="Entertainment & Spectacle",
        secondary_hooks=["FOMO", "Curiosity"],
        strategy="Viral content with high production value",
    )


def generic_hooks() -> HookAnalysis:
    return HookAnalysis(
        primary_hook="Viewer Entertainment",
        secondary_hooks=["Engagement"],
        strategy="Audience retention focus",
    )


def analyze_hooks(videos: list[VideoRecord], generator: TextGenerator | None) -> Ok | Fallback:
    titles = [v.title for v in videos]
    if any("challenge" in t.lower() or "$" in t for t in titles):
        return Ok(spectacle_hooks())

    prompt = HOOKS_PROMPT.format(titles="\n".join(titles)[:TITLE_BUDGET])
    hooks, reason = _ask_model(generator, prompt, _HOOKS, dict)
    if hooks is None:
        return _degraded("Hook", generic_hooks(), reason)
    return Ok(hooks)


# Keywords


def default_keywords() -> list[Keyword]:
    return [Keyword(keyword="content", importance="medium")]


def _importance(count: int) -> str:
    if count > 5:
        return "high"
    if count > 2:
        return "medium"
    return "low"


def extract_keywords(videos: list[VideoRecord]) -> Ok | Fallback:
    text = " ".join(f"{v.title} {v.description}" for v in videos)
    counts = Counter(
        word for word in text.lower().split()
        if len(word) > 4 and word not in KEYWORD_STOPWORDS
    )
    if not counts:
        return _degraded("Keyword", default_keywords(), "no keyword candidates", logging.INFO)

    # most_common keeps first-seen order among equal counts
    return Ok([
        Keyword(keyword=word, importance=_importance(count))
        for word, count in counts.most_common(12)
    ])


# Report assembly


def build_report(
    dataset: ChannelDataset,
    generator: TextGenerator | None,
    max_workers: int = 4,
) -> Report:
    """Run the four analyses over *dataset* and assemble the intelligence report."""
    videos = list(dataset.videos)
    comments = [c for v in videos for c in v.comments]
    logger.info(
        "Processing %d transcripts and %d comments...",
        sum(1 for v in videos if v.has_transcript),
        len(comments),
    )

    analyses: list[tuple[str, Callable[[], Ok | Fallback], Callable[[], Any]]] = [
        ("features", lambda: analyze_features(videos, generator), lambda: features_from_titles(videos)),
        ("sentiment", lambda: analyze_sentiment(comments, generator), positive_sentiment),
        ("hooks", lambda: analyze_hooks(videos, generator), generic_hooks),
        ("keywords", lambda: extract_keywords(videos), default_keywords),
    ]

    results = {}
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [(name, executor.submit(run), fallback) for name, run, fallback in analyses]
        for name, future, fallback in futures:
            try:
                results[name] = future.result().value
            except Exception:
                logger.exception("%s analysis failed unexpectedly, using placeholder", name)
                results[name] = fallback()

    return Report(
        channel_handle=dataset.channel_handle,
        analyzed_at=datetime.now(timezone.utc),
        metadata=ReportMetadata(
            videos_analyzed=dataset.total_videos_analyzed,
            comments_analyzed=dataset.total_comments,
        ),
        **results,
    )
