import argparse
import logging
import signal
import sys
from typing import Optional

from hostwatch import __version__
from hostwatch.config import (
    DEFAULT_INTERVAL,
    MonitorConfig,
    env,
    load_env,
    resolve_hostname,
)
from hostwatch.exceptions import ConfigError
from hostwatch.logging_config import setup_logging
from hostwatch.monitor.cycle import SystemMonitor
from hostwatch.monitor.evaluator import (
    DEFAULT_CPU_LIMIT,
    DEFAULT_DISK_LIMIT,
    DEFAULT_MEMORY_LIMIT,
)
from hostwatch.monitor.incidents import IncidentFactory, IncidentTracker
from hostwatch.monitor.sampler import DEFAULT_MOUNT_ROOT, ResourceSampler
from hostwatch.notify import WebhookNotifier
from hostwatch.scheduler import Scheduler
from hostwatch.ui import console

logger = logging.getLogger("hostwatch.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hostwatch",
        description="Report CPU, memory and disk threshold breaches to an alerting webhook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  hostwatch --url https://uptime.betterstack.com/api/v1/incoming-webhook/XXXX
  hostwatch --url $WEBHOOK --interval 60 --disk-limit 80
  hostwatch --url $WEBHOOK --once -v

Environment Variables:
  HOSTWATCH_URL            Webhook URL (used when --url is not given)
  HOSTWATCH_INTERVAL       Check interval in seconds
  HOSTWATCH_CPU_LIMIT      CPU usage threshold percentage
  HOSTWATCH_MEMORY_LIMIT   Memory usage threshold percentage
  HOSTWATCH_DISK_LIMIT     Disk usage threshold percentage
  HOSTWATCH_MOUNT_ROOT     Directory whose children are monitored as volumes
        """,
    )
    parser.add_argument("--version", "-V", action="version", version=f"hostwatch {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug output")
    parser.add_argument("--url", default=env("URL"), help="Alerting webhook URL (required)")
    parser.add_argument(
        "--interval",
        type=int,
        default=env("INTERVAL", str(DEFAULT_INTERVAL)),
        help=f"Check interval in seconds (default: {DEFAULT_INTERVAL})",
    )
    parser.add_argument(
        "--cpu-limit",
        type=float,
        default=env("CPU_LIMIT", str(DEFAULT_CPU_LIMIT)),
        help=f"CPU usage threshold percentage (default: {DEFAULT_CPU_LIMIT:.0f})",
    )
    parser.add_argument(
        "--memory-limit",
        type=float,
        default=env("MEMORY_LIMIT", str(DEFAULT_MEMORY_LIMIT)),
        help=f"Memory usage threshold percentage (default: {DEFAULT_MEMORY_LIMIT:.0f})",
    )
    parser.add_argument(
        "--disk-limit",
        type=float,
        default=env("DISK_LIMIT", str(DEFAULT_DISK_LIMIT)),
        help=f"Disk usage threshold percentage (default: {DEFAULT_DISK_LIMIT:.0f})",
    )
    parser.add_argument(
        "--mount-root",
        default=env("MOUNT_ROOT", DEFAULT_MOUNT_ROOT),
        help=f"Directory whose children are monitored as volumes (default: {DEFAULT_MOUNT_ROOT})",
    )
    parser.add_argument("--once", action="store_true", help="Run a single check and exit")
    return parser


def config_from_args(args: argparse.Namespace) -> MonitorConfig:
    return MonitorConfig(
        url=args.url or "",
        interval=args.interval,
        cpu_limit=args.cpu_limit,
        memory_limit=args.memory_limit,
        disk_limit=args.disk_limit,
        mount_root=args.mount_root,
    )


def log_settings(config: MonitorConfig) -> None:
    logger.info("Starting monitoring with settings:")
    logger.info(f"- Check interval: {config.interval} seconds")
    logger.info(f"- CPU limit: {config.cpu_limit:.1f}%")
    logger.info(f"- Memory limit: {config.memory_limit:.1f}%")
    logger.info(f"- Disk limit: {config.disk_limit:.1f}%")
    logger.info(f"- Mount root: {config.mount_root}")


def build_scheduler(config: MonitorConfig, hostname: str) -> Scheduler:
    limits = config.limits
    monitor = SystemMonitor(
        sampler=ResourceSampler(interval=config.interval, mount_root=config.mount_root),
        limits=limits,
        notifier=WebhookNotifier(config.url),
    )
    tracker = IncidentTracker(IncidentFactory(hostname, limits))
    return Scheduler(config.interval, monitor.run_cycle, tracker)


def main(argv: Optional[list[str]] = None) -> int:
    # Load .env BEFORE building the parser so HOSTWATCH_* defaults are visible
    load_env()

    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = config_from_args(args)
        hostname = resolve_hostname()
    except ConfigError as e:
        if not args.url:
            parser.print_usage(sys.stderr)
        console.error(f"Error: {e}")
        return 1

    log_settings(config)
    scheduler = build_scheduler(config, hostname)

    if not args.once:
        signal.signal(signal.SIGTERM, lambda signum, frame: scheduler.stop())
    try:
        scheduler.run(max_cycles=1 if args.once else None)
    except KeyboardInterrupt:
        console.warning("Interrupted, stopping monitoring")
        scheduler.stop()
    logger.info("Monitoring stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
