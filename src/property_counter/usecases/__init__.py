from .checker_registry import CheckerRegistry, UnknownCheckerError, default_registry
from .report import ReportLine, ReportRunner, format_line, write_report

__all__ = [
    "CheckerRegistry",
    "ReportLine",
    "ReportRunner",
    "UnknownCheckerError",
    "default_registry",
    "format_line",
    "write_report",
]
