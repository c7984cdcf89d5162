"""Flight join application entry point. Use --help for usage."""

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from pyspark.sql import SparkSession

from config.config import load_config
from core.errors.exceptions import FlightError, classify_exception
from core.logging.setup import generate_run_id, setup_logging
from core.oauth2.iam import IamAuthentication
from core.security.ssl_utils import create_session
from flight.app import FlightJoinApp
from flight.discovery import Discovery

# __main__.py is at src/flight/__main__.py, so root is 3 levels up
PROJECT_ROOT = Path(__file__).parent.parent.parent

APP_NAME = "Sample join"

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Join two Flight data assets with Spark and write the result",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Run with the default config (src/config/config.yaml)
    AUTH_KEY=... python -m flight

    # Use a custom config file
    python -m flight --config /path/to/config.yaml

    # Containerized / spark-submit: log to stdout only
    python -m flight --log-to-stdout
        """,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config.yaml file (default: src/config/config.yaml)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Log directory path (default: from LOG_DIR env var or ./logs)",
    )

    parser.add_argument(
        "--log-to-stdout",
        action="store_true",
        help="Send all log output to stdout only, skipping file handlers. "
        "Can also be set via LOG_TO_STDOUT environment variable.",
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    load_dotenv(PROJECT_ROOT / ".env")
    args = parse_args(argv)

    log_dir = args.log_dir or os.getenv("LOG_DIR")
    log_to_stdout = args.log_to_stdout or os.getenv("LOG_TO_STDOUT", "false").lower() == "true"
    setup_logging(
        name="flight",
        stage="join",
        log_dir=Path(log_dir) if log_dir else None,
        console_level=getattr(logging, args.log_level),
        run_id=generate_run_id(),
        log_to_stdout=log_to_stdout,
    )

    try:
        config = load_config(config_path=args.config)

        # One HTTP session for the authentication and discovery REST APIs
        with create_session() as session:
            auth = IamAuthentication(
                session, config.auth_endpoint, timeout_seconds=config.http_timeout_seconds
            )
            access_token = auth.access_token(config.auth_key())

            discovery = Discovery(
                session, config.api_host, timeout_seconds=config.http_timeout_seconds
            )
            discovery.set_access_token(access_token)

            spark = SparkSession.builder.appName(APP_NAME).getOrCreate()
            try:
                FlightJoinApp(spark, discovery, config, access_token).run()
            finally:
                spark.stop()
    except FlightError as e:
        logger.error(
            f"Flight join failed: {e}",
            extra={
                "error_category": e.category.value,
                "error_type": type(e).__name__,
                "retryable": e.is_retryable,
            },
        )
        return 1
    except Exception as e:
        # Spark and Py4J failures surface here
        logger.exception(
            "Fatal error",
            extra={
                "error": str(e),
                "error_category": classify_exception(e).value,
                "error_type": type(e).__name__,
            },
        )
        return 1

    logger.info("Flight join completed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
