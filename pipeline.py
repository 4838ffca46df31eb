import logging
from concurrent.futures import ThreadPoolExecutor

from ai_analyzer import build_report
from collector import collect_channel_data
from llm import TextGenerator
from metrics import build_video_breakdown, compute_metrics
from models import ChannelAnalysis

logger = logging.getLogger(__name__)


def analyze_channel(
    channel_handle: str,
    provider,
    generator: TextGenerator | None,
    max_workers: int = 8,
) -> ChannelAnalysis:
    """Collect a channel's recent content, then build the report and metrics side by side."""
    logger.info("Analyzing channel: %s", channel_handle)
    logger.info("Step 1: gathering YouTube data...")
    dataset = collect_channel_data(channel_handle, provider, max_workers=max_workers)
    logger.info(
        "Found %d videos with %d comments",
        dataset.total_videos_analyzed,
        dataset.total_comments,
    )

    logger.info("Step 2: running intelligence analysis and metrics...")
    with ThreadPoolExecutor(max_workers=2) as executor:
        report_future = executor.submit(build_report, dataset, generator)
        metrics_future = executor.submit(compute_metrics, dataset)
        metrics = metrics_future.result()
        report = report_future.result()
    logger.info("Analysis complete for %s", channel_handle)

    return ChannelAnalysis(
        report=report,
        metrics=metrics,
        channel_info=dataset.channel_stats,
        video_breakdown=build_video_breakdown(dataset.videos),
    )
