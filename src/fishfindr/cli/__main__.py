"""CLI entry point: python -m fishfindr.cli {migrate,serve,clusters,plot,feed}"""

import argparse
import asyncio
import sys
from pathlib import Path

import structlog

from fishfindr.api.schemas import report_to_response
from fishfindr.clustering import load_clustering_config
from fishfindr.config.settings import get_settings
from fishfindr.db.session import get_session_factory
from fishfindr.errors import FishFindrError
from fishfindr.heatmap import points_json
from fishfindr.hotspots import HotspotReport, compute_hotspots
from fishfindr.logging_config import configure_logging
from fishfindr.rendering import point_groups, render_png
from fishfindr.store import LocationRepository


async def run_migrate() -> None:
    """Create the location schema."""
    session_factory = get_session_factory()
    async with session_factory() as session:
        await LocationRepository(session).migrate()
    structlog.get_logger().info("migration_complete")


async def load_report() -> HotspotReport:
    """Cluster every stored location with the configured parameters."""
    settings = get_settings()
    config = load_clustering_config(settings.clustering_config_path)
    session_factory = get_session_factory()
    async with session_factory() as session:
        return await compute_hotspots(LocationRepository(session), config)


async def run_clusters(output: Path | None) -> None:
    report = await load_report()
    _write(report_to_response(report).model_dump_json(indent=2).encode("utf-8"), output)


async def run_plot(output: Path) -> None:
    report = await load_report()
    png = render_png(point_groups(report.result, report.points))
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(png)
    structlog.get_logger().info("plot_written", path=str(output), bytes=len(png))


async def run_feed(output: Path | None) -> None:
    session_factory = get_session_factory()
    async with session_factory() as session:
        locations = await LocationRepository(session).all()
    _write(points_json(locations), output)


def _write(content: bytes, output: Path | None) -> None:
    if output is None:
        sys.stdout.buffer.write(content + b"\n")
        sys.stdout.flush()
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(content)
    structlog.get_logger().info("file_written", path=str(output), bytes=len(content))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fishfindr.cli",
        description="FishFindr catch hot-spot CLI",
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("migrate", help="Create the location table")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", type=str, default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=8080)

    clusters_parser = subparsers.add_parser("clusters", help="Print the cluster report as JSON")
    clusters_parser.add_argument("--output", type=str, default=None, help="Write to a file instead of stdout")

    plot_parser = subparsers.add_parser("plot", help="Render the cluster scatter plot")
    plot_parser.add_argument("--output", type=str, default="plot.png", help="PNG path (default: plot.png)")

    feed_parser = subparsers.add_parser("feed", help="Print the lat/lng point feed as JSON")
    feed_parser.add_argument("--output", type=str, default=None, help="Write to a file instead of stdout")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    settings = get_settings()
    if args.command == "serve":
        configure_logging(json_output=settings.log_json, log_level=settings.log_level)
        import uvicorn

        uvicorn.run("fishfindr.api.app:app", host=args.host, port=args.port, log_config=None)
        return

    # stdout carries command output, keep log lines off it
    configure_logging(json_output=settings.log_json, log_level=settings.log_level, stream=sys.stderr)
    output = Path(args.output) if getattr(args, "output", None) else None
    commands = {
        "migrate": run_migrate,
        "clusters": lambda: run_clusters(output),
        "plot": lambda: run_plot(output),
        "feed": lambda: run_feed(output),
    }
    try:
        asyncio.run(commands[args.command]())
    except FishFindrError as exc:
        structlog.get_logger().error("command_failed", command=args.command, error=str(exc))
        sys.exit(2)


if __name__ == "__main__":
    main()
