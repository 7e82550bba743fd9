"""Main entry point for the job alert pipeline."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import os
import signal
import sys
import threading
import time
from pathlib import Path
from typing import List, Optional, Tuple

from jobalert.adapters.exceptions import AdapterConfigurationError
from jobalert.adapters.factory import build_adapters
from jobalert.config.environment import EnvironmentConfig
from jobalert.config.exceptions import ConfigurationError
from jobalert.config.loader import load_config
from jobalert.config.models import AppConfig
from jobalert.ledger import LedgerError, NotificationLedger
from jobalert.logging import get_logger
from jobalert.logging.config import configure_logging
from jobalert.notifications import Dispatcher, build_channels
from jobalert.pipeline import JobAlertPipeline, PipelineRunResult
from jobalert.scheduler import SchedulerService

logger = get_logger(__name__, component="cli")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve the effective log level.

    Log level priority: CLI > LOG_LEVEL environment variable > config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override.upper()
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level or "INFO"

    return app_config, env_config


def build_pipeline(app_config: AppConfig, env_config: EnvironmentConfig) -> JobAlertPipeline:
    """Wire adapters, ledger and channels into a pipeline.

    Raises:
        AdapterConfigurationError: If a configured source cannot be built
    """
    return JobAlertPipeline(
        app_config=app_config,
        adapters=build_adapters(app_config.sources, app_config.advanced),
        ledger=NotificationLedger(app_config.ledger_path),
        dispatcher=Dispatcher(build_channels(app_config, env_config)),
    )


def log_run_summary(result: PipelineRunResult) -> None:
    if result.skipped:
        return
    report = result.dispatch_report
    logger.info(
        f"Run completed: {result.harvested} harvested, {result.unique} unique, "
        f"{result.matched} matched, {result.new} new, {result.notified} notified",
        extra={
            "event": "service.run.completed",
            "run_id": result.run_id,
            "dry_run": result.dry_run,
            "duration_seconds": round(result.total_duration_seconds, 3),
            "channels_sent": report.sent if report else [],
            "channels_failed": report.failed if report else [],
        },
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jobalert",
        description="Job alert - harvest job boards and notify new matching postings",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level (overrides config and environment)",
    )
    parser.add_argument(
        "--schedule",
        action="store_true",
        help="Keep running and repeat the pipeline every scan_interval",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be sent without notifying or updating the ledger",
    )
    return parser


def run_scheduled(pipeline: JobAlertPipeline, app_config: AppConfig, dry_run: bool) -> int:
    """Run the pipeline every scan_interval until a signal or a ledger failure."""
    shutdown_event = threading.Event()
    fatal_errors: List[LedgerError] = []

    scheduler_service: Optional[SchedulerService] = None

    def scheduled_run() -> None:
        try:
            log_run_summary(pipeline.run_once(dry_run=dry_run))
        except LedgerError as e:
            logger.critical(
                f"Ledger failure, stopping scheduler: {e}",
                extra={"event": "ledger.error", "error_type": type(e).__name__},
                exc_info=True,
            )
            fatal_errors.append(e)
            scheduler_service.shutdown(wait=False)

    scheduler_service = SchedulerService(
        pipeline_callable=scheduled_run,
        interval_seconds=app_config.scan_interval_seconds,
        shutdown_event=shutdown_event,
    )

    def signal_handler(signum, frame):
        logger.info(
            f"Received signal {signum}, shutting down",
            extra={"event": "service.signal_received", "signal": signum},
        )
        scheduler_service.shutdown(wait=False)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    scheduler_service.start()
    logger.info(
        "Scheduler started. Press Ctrl+C to stop",
        extra={"event": "service.schedule_mode.started"},
    )

    try:
        shutdown_event.wait()
    except KeyboardInterrupt:
        scheduler_service.shutdown(wait=False)

    return 1 if fatal_errors else 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        0 when the run completes (including no new postings and adapter or
        channel failures); 1 on configuration, ledger or other fatal errors.
    """
    start_time = time.time()
    args = create_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=os.environ.get("ENVIRONMENT", "local"),
        )
        logger.info(
            "Job alert starting",
            extra={
                "event": "service.starting",
                "config_path": str(args.config or "config.yaml"),
                "log_level": env_config.log_level,
                "schedule": args.schedule,
                "dry_run": args.dry_run,
            },
        )
        logger.info(
            "Configuration loaded",
            extra={
                "event": "config.loaded",
                "enabled_sources": [s.type for s in app_config.get_enabled_sources()],
                "email_configured": env_config.email_configured,
                "telegram_configured": env_config.telegram_configured,
                "whatsapp_configured": env_config.whatsapp_configured,
                "ledger_path": app_config.ledger_path,
            },
        )

        pipeline = build_pipeline(app_config, env_config)

        if args.schedule:
            exit_code = run_scheduled(pipeline, app_config, args.dry_run)
        else:
            log_run_summary(pipeline.run_once(dry_run=args.dry_run))
            exit_code = 0

        logger.info(
            "Job alert stopped",
            extra={
                "event": "service.stopping",
                "uptime_seconds": round(time.time() - start_time, 2),
                "exit_code": exit_code,
            },
        )
        return exit_code

    except (ConfigurationError, AdapterConfigurationError) as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": type(e).__name__},
        )
        return 1
    except LedgerError as e:
        print(f"Ledger Error: {e}", file=sys.stderr)
        logger.critical(
            f"Ledger error: {e}",
            extra={"event": "ledger.error", "error_type": type(e).__name__},
            exc_info=True,
        )
        return 1
    except KeyboardInterrupt:
        print("\nShutdown requested by user", file=sys.stderr)
        return 0
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error",
            extra={
                "event": "service.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
