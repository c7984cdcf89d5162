"""Log formatters for JSON and console output."""

import json
import logging
import re
import sys
from datetime import UTC, datetime
from typing import Any

from core.logging.context import get_log_context


class JSONFormatter(logging.Formatter):
    """
    JSON log formatter with context injection.

    Produces one JSON object per line for easy parsing with jq/grep.
    Redacts token-like query parameters and bearer values before logging.
    """

    # Fields to extract from LogRecord extras
    EXTRA_FIELDS = [
        # HTTP
        "http_status",
        "http_method",
        "http_url",
        "duration_ms",
        # Errors
        "error_category",
        "error_message",
        "error_type",
        "error",
        "retryable",
        # Discovery
        "api_host",
        "context",
        "path",
        "fetch",
        # Options
        "num_partitions",
        "batch_size",
        "timeout",
        "option_keys",
        # Spark
        "format",
        "mode",
        "join_column",
        "rows_written",
        # Auth
        "auth_endpoint",
        "expires_in",
    ]

    NUMERIC_FIELDS = {
        "duration_ms": float,
        "http_status": int,
        "num_partitions": int,
        "batch_size": int,
        "rows_written": int,
        "expires_in": int,
    }

    # Fields that contain URLs and should be sanitized
    URL_FIELDS = ["http_url", "auth_endpoint"]

    SENSITIVE_PARAMS_PATTERN = re.compile(
        r"([?&])(apikey|token|access_token|key|secret|password|auth)=[^&]*",
        re.IGNORECASE,
    )
    BEARER_PATTERN = re.compile(r"(Bearer\s+)[A-Za-z0-9\-._~+/]+=*", re.IGNORECASE)

    def _sanitize_url(self, url: str) -> str:
        return self.SENSITIVE_PARAMS_PATTERN.sub(r"\1\2=[REDACTED]", url)

    def _sanitize_message(self, message: str) -> str:
        return self.BEARER_PATTERN.sub(r"\1[REDACTED]", message)

    def _sanitize_value(self, key: str, value: Any) -> Any:
        if key in self.URL_FIELDS and isinstance(value, str):
            return self._sanitize_url(value)
        return value

    def _ensure_type(self, field: str, value: Any) -> Any:
        if field not in self.NUMERIC_FIELDS or value is None:
            return value

        expected_type = self.NUMERIC_FIELDS[field]
        try:
            return expected_type(value)
        except (ValueError, TypeError):
            return None

    def _base_log_entry(self, record: logging.LogRecord) -> dict[str, Any]:
        return {
            "ts": datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": self._sanitize_message(record.getMessage()),
        }

    @staticmethod
    def _inject_context(log_entry: dict[str, Any], log_context: dict[str, Any]) -> None:
        for field in ("run_id", "stage", "asset_id", "connection_id"):
            if log_context.get(field):
                log_entry[field] = log_context[field]

    def _inject_extra_fields(self, log_entry: dict[str, Any], record: logging.LogRecord) -> None:
        for field in self.EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                typed_value = self._ensure_type(field, value)
                log_entry[field] = self._sanitize_value(field, typed_value)

    def _inject_exception(self, log_entry: dict[str, Any], record: logging.LogRecord) -> None:
        if not record.exc_info:
            return

        exc_type, exc_value, _ = record.exc_info
        log_entry["exception"] = {
            "type": exc_type.__name__ if exc_type else None,
            "message": str(exc_value) if exc_value else None,
            "stacktrace": self.formatException(record.exc_info),
        }

    def format(self, record: logging.LogRecord) -> str:
        log_entry = self._base_log_entry(record)
        self._inject_context(log_entry, get_log_context())

        if record.levelno in (logging.DEBUG, logging.ERROR, logging.CRITICAL):
            log_entry["file"] = f"{record.filename}:{record.lineno}"

        self._inject_extra_fields(log_entry, record)
        self._inject_exception(log_entry, record)

        return json.dumps(log_entry, default=str, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable console formatter with color-coded log levels.

    Colors are auto-disabled when output is not a TTY (pipes, files).
    """

    # ANSI color codes
    COLORS = {
        logging.DEBUG: "\033[36m",  # Cyan
        logging.INFO: "\033[32m",  # Green
        logging.WARNING: "\033[33m",  # Yellow
        logging.ERROR: "\033[31m",  # Red
        logging.CRITICAL: "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._use_colors = sys.stdout.isatty()

    def _format_level_name(self, record: logging.LogRecord) -> str:
        level_name = record.levelname
        if not self._use_colors:
            return level_name

        color = self.COLORS.get(record.levelno, "")
        if not color:
            return level_name

        return f"{color}{level_name}{self.RESET}"

    @staticmethod
    def _build_prefix(level_name: str, log_context: dict[str, Any]) -> str:
        parts = [
            datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            level_name,
        ]
        if log_context.get("stage"):
            parts.append(f"[{log_context['stage']}]")
        return " - ".join(parts)

    @staticmethod
    def _build_tags(log_context: dict[str, Any]) -> list[str]:
        tags = []
        if log_context.get("run_id"):
            tags.append(f"[{log_context['run_id']}]")
        if log_context.get("asset_id"):
            tags.append(f"[asset:{log_context['asset_id'][:8]}]")
        if log_context.get("connection_id"):
            tags.append(f"[conn:{log_context['connection_id'][:8]}]")
        return tags

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for console output with optional color coding."""
        log_context = get_log_context()

        prefix = self._build_prefix(self._format_level_name(record), log_context)
        tags = self._build_tags(log_context)
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        if tags:
            return f"{prefix} - {' '.join(tags)} {message}"

        return f"{prefix} - {message}"
