from .cli import apply_logging_overrides, apply_output_override, build_parser, parse_args, run

# app package exports CLI helpers for reuse in tests and entrypoints.
__all__ = ["apply_logging_overrides", "apply_output_override", "build_parser", "parse_args", "run"]
