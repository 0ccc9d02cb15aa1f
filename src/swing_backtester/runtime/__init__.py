"""Run metadata."""

from swing_backtester.runtime.context import RunContext, create_run_context

__all__ = ["RunContext", "create_run_context"]
