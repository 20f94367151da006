from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

from property_counter.adapters.factory import log_sink_from_config, output_sink_from_config
from property_counter.config.loader import load_config
from property_counter.services.checkers import PropertyCheckers
from property_counter.services.counter import PropertyCounter
from property_counter.usecases.checker_registry import default_registry
from property_counter.usecases.config_models import AppConfig, LoggingConfig
from property_counter.usecases.report import ReportRunner, write_report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Count sequence elements by property")
    parser.add_argument("--config", required=True, help="Path to YAML config")
    parser.add_argument("--output", help="Override output file path")
    parser.add_argument(
        "--log-sink",
        choices=["stdout", "jsonl", "memory", "none"],
        help="Override logging sink",
    )
    parser.add_argument("--log-path", help="Override JSONL log file path")
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Parse CLI arguments; caller passes argv for testability.
    return build_parser().parse_args(argv)


def apply_logging_overrides(config: AppConfig, args: argparse.Namespace) -> None:
    # CLI overrides take precedence over config.
    if args.log_sink is None and args.log_path is None:
        return

    sink = args.log_sink if args.log_sink is not None else config.logging.sink
    path = args.log_path if args.log_path is not None else config.logging.path
    # A path alone implies a JSONL sink.
    if args.log_sink is None and args.log_path is not None:
        sink = "jsonl"
    config.logging = LoggingConfig(sink=sink, path=path)


def apply_output_override(config: AppConfig, args: argparse.Namespace) -> None:
    if args.output is not None:
        config.output.file_path = args.output


def run(argv: Sequence[str] | None = None) -> int:
    # Thin orchestration wrapper; counting logic lives in services.
    args = parse_args(argv)
    config = load_config(Path(args.config))
    apply_logging_overrides(config, args)
    apply_output_override(config, args)

    log_sink = log_sink_from_config(config.logging)
    output_sink = output_sink_from_config(config.output)
    library = PropertyCheckers()
    counter = PropertyCounter(
        log_sink=log_sink,
        max_workers=config.counter.max_workers,
        parallel_threshold=config.counter.parallel_threshold,
    )
    runner = ReportRunner(counter=counter, registry=default_registry(library))
    try:
        write_report(runner.run(config), output_sink)
    finally:
        output_sink.close()
        log_sink.close()
    return 0
