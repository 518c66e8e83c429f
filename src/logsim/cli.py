"""
Command-line interface for the log traffic simulator.

Provides commands for:
- Serving the instrumented HTTP app with the continuous scheduler
- Running the scheduler headless for a fixed duration or tick count
- Listing and validating the scenario catalog
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path

from .config import ConfigError, Settings, load_settings
from .scenarios import ScenarioContext, registry
from .scheduler import ContinuousScheduler
from .sinks import (
    FileLogExporter,
    MemorySink,
    OtelLogSink,
    create_console_exporter,
    create_otlp_log_exporter,
)
from .validators import EventValidator, ValidationResult

logger = logging.getLogger(__name__)

_DEFAULT_ENDPOINT = "http://localhost:4318"


def _add_output_arguments(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config.yaml (default: resource/config/config.yaml)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible traffic")
    parser.add_argument(
        "--service-name",
        type=str,
        default=None,
        help="service.name resource attribute (overrides config)",
    )
    parser.add_argument(
        "--output-file",
        type=str,
        default=None,
        help="Append events as JSON lines to this file",
    )
    parser.add_argument(
        "--endpoint",
        type=str,
        default=None,
        help=f"Ship events to an OTLP collector (e.g. {_DEFAULT_ENDPOINT})",
    )
    parser.add_argument(
        "--protocol",
        choices=["http", "grpc"],
        default="http",
        help="OTLP protocol for --endpoint (default: http)",
    )
    parser.add_argument(
        "--console",
        action="store_true",
        help="Print events as JSON lines to stdout (default when no other output is given)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="logsim",
        description="Continuous generator of realistic structured log traffic",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Serve the instrumented API with background traffic, JSON lines on stdout
  logsim serve --port 5000

  # Ship events to an OTLP collector
  logsim serve --endpoint http://localhost:4318

  # Write 200 ticks of traffic to a file and exit
  logsim run --ticks 200 --seed 7 --output-file events.jsonl

  # Check every scenario's output
  logsim validate --samples 50
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug diagnostics on stderr")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    serve_parser = subparsers.add_parser("serve", help="Serve the instrumented HTTP app")
    serve_parser.add_argument("--host", type=str, default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")
    serve_parser.add_argument(
        "--no-scheduler",
        action="store_true",
        help="Only log real requests; do not generate background traffic",
    )
    _add_output_arguments(serve_parser)

    run_parser = subparsers.add_parser("run", help="Run the scheduler without the HTTP server")
    run_parser.add_argument(
        "--duration",
        type=float,
        default=60.0,
        help="Seconds to run the continuous loops (default: 60)",
    )
    run_parser.add_argument(
        "--ticks",
        type=int,
        default=None,
        help="Emit this many fast-loop ticks back to back and exit (overrides --duration)",
    )
    _add_output_arguments(run_parser)

    subparsers.add_parser("list", help="List the scenario catalog")

    validate_parser = subparsers.add_parser("validate", help="Validate generated events")
    validate_parser.add_argument(
        "--samples",
        type=int,
        default=20,
        help="Events to generate per scenario (default: 20)",
    )
    validate_parser.add_argument("--seed", type=int, default=None, help="Seed for the samples")

    return parser


def resolve_settings(args: argparse.Namespace) -> Settings:
    """Config file and environment, then CLI flags on top."""
    config_path = Path(args.config) if getattr(args, "config", None) else None
    settings = load_settings(config_path)
    overrides = {}
    for flag, name in (("host", "host"), ("port", "port"), ("seed", "seed"), ("service_name", "service_name")):
        value = getattr(args, flag, None)
        if value is not None:
            overrides[name] = value
    return replace(settings, **overrides)


def build_sink(args: argparse.Namespace, settings: Settings) -> OtelLogSink:
    """One OpenTelemetry sink fanning out to every requested exporter."""
    exporters = []
    if args.output_file:
        exporters.append(FileLogExporter(args.output_file))
    if args.endpoint:
        exporters.append(create_otlp_log_exporter(args.endpoint, protocol=args.protocol))
    if args.console or not exporters:
        exporters.append(create_console_exporter())
    return OtelLogSink(exporters, service_name=settings.service_name)


def build_contexts(settings: Settings) -> tuple[ScenarioContext, ScenarioContext]:
    """Scheduler and HTTP contexts; independent random sources derived from one seed."""
    seed = settings.seed
    scheduler_ctx = ScenarioContext.create(seed=seed, id_formats=settings.id_formats)
    http_ctx = ScenarioContext.create(
        seed=None if seed is None else seed + 1, id_formats=settings.id_formats
    )
    return scheduler_ctx, http_ctx


def cmd_serve(args: argparse.Namespace):
    """Serve the HTTP app until interrupted."""
    from .server import create_app, serve

    settings = resolve_settings(args)
    sink = build_sink(args, settings)
    scheduler_ctx, http_ctx = build_contexts(settings)
    scheduler = (
        None
        if args.no_scheduler
        else ContinuousScheduler(sink, scheduler_ctx, settings.scheduler)
    )
    app = create_app(sink, settings=settings, http_ctx=http_ctx, scheduler=scheduler)

    logger.info("Serving on %s:%s", settings.host, settings.port)
    try:
        serve(app, settings.host, settings.port)
    finally:
        sink.close()


async def _run_scheduler(scheduler: ContinuousScheduler, duration_s: float):
    async with scheduler:
        await asyncio.sleep(duration_s)


def cmd_run(args: argparse.Namespace):
    """Run the scheduler headless."""
    settings = resolve_settings(args)
    sink = build_sink(args, settings)
    scheduler_ctx, _ = build_contexts(settings)
    scheduler = ContinuousScheduler(sink, scheduler_ctx, settings.scheduler)

    print("Starting log traffic generation...", file=sys.stderr)
    try:
        if args.ticks is not None:
            emitted = sum(len(scheduler.tick()) for _ in range(max(0, args.ticks)))
            print(f"   Emitted {emitted} events in {args.ticks} ticks", file=sys.stderr)
        else:
            print(f"   Duration: {args.duration}s", file=sys.stderr)
            asyncio.run(_run_scheduler(scheduler, args.duration))
    except KeyboardInterrupt:
        print("\nGeneration interrupted", file=sys.stderr)
    finally:
        sink.close()


def cmd_list(args: argparse.Namespace):
    """List the scenario catalog."""
    scenarios = sorted(registry(), key=lambda s: (s.category, s.name))
    print(f"Available scenarios ({len(scenarios)}):")
    print()
    for entry in scenarios:
        print(f"  - {entry.name} [{entry.category}]")
        if entry.description:
            print(f"     {entry.description}")


async def _sample_burst(ctx: ScenarioContext, sink: MemorySink) -> None:
    async def no_wait(_seconds: float) -> None:
        return None

    scheduler = ContinuousScheduler(sink, ctx, sleep=no_wait)
    await scheduler.run_burst()


def sample_events(samples: int, seed: int | None = None) -> MemorySink:
    """Generate samples from every scenario plus one burst into a MemorySink."""
    sink = MemorySink()
    ctx = ScenarioContext.create(seed=seed)
    for entry in registry():
        for _ in range(max(0, samples)):
            sink.emit(entry.generate(ctx))
    asyncio.run(_sample_burst(ctx, sink))
    return sink


def cmd_validate(args: argparse.Namespace) -> ValidationResult:
    """Generate samples from every scenario and validate them."""
    sink = sample_events(args.samples, args.seed)
    # Sample bursts run to completion, so every announced failure must be present.
    result = EventValidator().validate_events(sink.events, complete=True)
    print(f"Validated {len(sink.events)} events from {len(registry())} scenarios")
    print(result)
    if not result.valid:
        sys.exit(1)
    return result


def main(argv: list[str] | None = None):
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    commands = {
        "serve": cmd_serve,
        "run": cmd_run,
        "list": cmd_list,
        "validate": cmd_validate,
    }
    try:
        commands[args.command](args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
