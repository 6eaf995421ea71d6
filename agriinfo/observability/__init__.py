from .logging_utils import (
    get_trace_id,
    init_logging,
    log_error_event,
    log_event,
    summarize_text,
    trace_scope,
)

__all__ = [
    "get_trace_id",
    "init_logging",
    "log_error_event",
    "log_event",
    "summarize_text",
    "trace_scope",
]
