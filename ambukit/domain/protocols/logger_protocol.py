"""LoggerProtocol definition for structured logging.

Standardizes structured logging across the codebase while remaining
backend-agnostic. Implementations MUST produce structured output
(message + key-value context).

Log Levels:
    - DEBUG: Cache hits, per-step diagnostics
    - INFO: Authorization decisions, cache invalidation, role/policy writes
    - WARNING: Degraded behaviour (cache backend unavailable)
    - ERROR: Store failures swallowed by the read path
    - CRITICAL: System-wide failure

Usage:
    from ambukit.core.container import get_logger

    logger = get_logger()
    logger.info("authorization_check", role_id=role_id, allowed=True)

    scoped = logger.bind(actor_id=actor.id)
    scoped.info("stock_updated")  # actor_id included automatically
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message.

        Args:
            message: Event name or message (avoid f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name or message.
            error: Optional exception instance; implementation may include
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message with optional exception details."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return new logger with permanently bound context.

        Original logger instance remains unchanged.
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol:
        """Alias for bind()."""
        ...
