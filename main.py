import argparse
import json
import sys

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

import config
from errors import AnalysisError
from llm import build_generator
from models import ChannelAnalysis
from pipeline import analyze_channel
from youtube_api import YouTubeDataProvider

console = Console()


def _format_number(n: int | None) -> str:
    if n is None:
        return "N/A"
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n / 1_000:.1f}K"
    return str(n)


def _print_metrics(analysis: ChannelAnalysis):
    m = analysis.metrics
    table = Table(title=analysis.channel_info.name or analysis.report.channel_handle, show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")

    table.add_row("Subscribers", _format_number(m.subscriber_count))
    table.add_row("Videos analyzed", str(m.videos_analyzed))
    table.add_row("Comments processed", str(m.comments_processed))
    table.add_row("Avg views", _format_number(m.avg_views))
    table.add_row("Views trend", f"{m.views_trend:+.1f}%")
    table.add_row("Engagement rate", f"{m.engagement_rate:.2f}%")
    table.add_row("Comment rate", f"{m.comment_rate:.2f}%")
    table.add_row("Uploads / week", f"{m.upload_frequency:.1f}")
    table.add_row("Transcripts", f"{m.transcript_availability}%")
    table.add_row("Best video", m.best_performing_video.title)
    console.print(table)


def _print_breakdown(analysis: ChannelAnalysis):
    table = Table(title="Video Breakdown", show_lines=True)
    table.add_column("Title", style="cyan", max_width=45)
    table.add_column("Views", justify="right", style="yellow")
    table.add_column("Likes", justify="right", style="green")
    table.add_column("Engagement", justify="right")
    table.add_column("Transcript", justify="center")

    for row in analysis.video_breakdown:
        table.add_row(
            row.title,
            _format_number(row.views),
            _format_number(row.likes),
            f"{row.engagement_rate}%",
            "yes" if row.has_transcript else "-",
        )
    console.print(table)


def _print_report(analysis: ChannelAnalysis):
    report = analysis.report
    table = Table(title="Intelligence Report", show_lines=True)
    table.add_column("Section", style="magenta")
    table.add_column("Findings", style="white", max_width=70)

    table.add_row("Features", "\n".join(f"{f.feature} ({f.category}, {f.confidence})" for f in report.features))
    table.add_row("Audience themes", "\n".join(f"{c.text} ({c.frequency})" for c in report.sentiment.complaints))
    table.add_row("Most requested", report.sentiment.most_requested_feature)
    table.add_row("Primary hook", report.hooks.primary_hook)
    table.add_row("Secondary hooks", ", ".join(report.hooks.secondary_hooks))
    table.add_row("Strategy", report.hooks.strategy)
    table.add_row("Keywords", ", ".join(f"{k.keyword} [{k.importance}]" for k in report.keywords))
    console.print(table)


def _save_json(payload: dict, filename: str):
    with open(filename, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
    console.print(f"\n[green]Results saved to {filename}[/green]")


def main():
    parser = argparse.ArgumentParser(description="YouTube Channel Intelligence")
    parser.add_argument("handle", help="Channel handle, with or without the leading @")
    parser.add_argument("--no-ai", action="store_true", help="Skip the model and use heuristics only")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON instead of tables")
    parser.add_argument("--output", help="Also write the result JSON to this file")
    args = parser.parse_args()

    config.setup_logging("WARNING" if args.json else None, console=console)
    config.validate()

    generator = None if args.no_ai else build_generator()
    if generator is None and not args.json:
        console.print("[dim]No model configured - using heuristics only[/dim]")

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=console,
        ) as progress:
            progress.add_task(f"Analyzing {args.handle}...", total=None)
            analysis = analyze_channel(
                args.handle,
                provider=YouTubeDataProvider(),
                generator=generator,
                max_workers=config.MAX_WORKERS,
            )
    except AnalysisError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    payload = analysis.to_payload()
    if args.json:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        _print_metrics(analysis)
        _print_breakdown(analysis)
        _print_report(analysis)

    if args.output:
        _save_json(payload, args.output)


if __name__ == "__main__":
    main()
