"""Result writers."""

from swing_backtester.reporting.output import (
    format_summary,
    serialize_result,
    write_blotter,
    write_summary,
)

__all__ = [
    "format_summary",
    "serialize_result",
    "write_blotter",
    "write_summary",
]
