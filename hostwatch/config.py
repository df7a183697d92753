"""Configuration for hostwatch.

Values come from command-line flags, falling back to HOSTWATCH_* environment
variables (optionally loaded from a .env file), then to built-in defaults.
"""

import logging
import os
import socket
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

from hostwatch.exceptions import ConfigError
from hostwatch.monitor.evaluator import (
    DEFAULT_CPU_LIMIT,
    DEFAULT_DISK_LIMIT,
    DEFAULT_MEMORY_LIMIT,
    Limits,
)
from hostwatch.monitor.sampler import DEFAULT_MOUNT_ROOT

logger = logging.getLogger(__name__)

ENV_PREFIX = "HOSTWATCH_"
DEFAULT_INTERVAL = 300


def load_env(path: Optional[Path] = None) -> bool:
    """Load a .env file into os.environ without overriding existing values.

    Returns:
        True if a file was found and loaded
    """
    dotenv_path = path or Path.cwd() / ".env"
    if not dotenv_path.is_file():
        return False
    logger.debug(f"Loading environment from {dotenv_path}")
    return load_dotenv(dotenv_path, override=False)


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(f"{ENV_PREFIX}{name}", default)


def resolve_hostname() -> str:
    try:
        hostname = socket.gethostname()
    except OSError as e:
        raise ConfigError(f"failed to get hostname: {e}") from e
    if not hostname:
        raise ConfigError("failed to get hostname: empty result")
    return hostname


@dataclass
class MonitorConfig:
    """Validated settings for one monitoring process.

    Attributes:
        url: Alerting webhook URL (required, http or https)
        interval: Check interval in whole seconds (> 0)
        cpu_limit: CPU usage threshold percentage [0, 100]
        memory_limit: Memory usage threshold percentage [0, 100]
        disk_limit: Disk usage threshold percentage [0, 100]
        mount_root: Directory whose children are monitored as volumes
    """
    url: str
    interval: int = DEFAULT_INTERVAL
    cpu_limit: float = DEFAULT_CPU_LIMIT
    memory_limit: float = DEFAULT_MEMORY_LIMIT
    disk_limit: float = DEFAULT_DISK_LIMIT
    mount_root: str = DEFAULT_MOUNT_ROOT

    def __post_init__(self):
        if not self.url:
            raise ConfigError("webhook URL is required")
        parsed = urlparse(self.url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigError(f"webhook URL must be an http(s) URL, got {self.url!r}")
        if self.interval <= 0:
            raise ConfigError("interval must be greater than 0")
        for name in ("cpu_limit", "memory_limit", "disk_limit"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ConfigError(f"{name.replace('_', '-')} must be between 0 and 100")

    @property
    def limits(self) -> Limits:
        return Limits(cpu=self.cpu_limit, memory=self.memory_limit, disk=self.disk_limit)
