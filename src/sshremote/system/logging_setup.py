# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/sshremote/system/logging_setup.py

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from sshremote.config.manager import ConnectorSettings, load_settings
from sshremote.system.exceptions import ConfigError


def setup_logging(debug: bool = False, settings: Optional[ConnectorSettings] = None) -> None:
    """Setup loguru logging for the command line front end.

    Configures:
    - Console output: WARNING+ (DEBUG+ with debug=True)
    - File output: DEBUG+ if local_log is configured in the settings
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level="DEBUG" if debug else "WARNING",
        format="<level>{level}</level>: {message}",
        colorize=True
    )

    try:
        if settings is None:
            settings = load_settings()
        if settings.local_log:
            log_dir = Path(settings.local_log).expanduser()
            log_dir.mkdir(parents=True, exist_ok=True)
            log_file = log_dir / "sshremote.log"

            logger.add(
                log_file,
                level="DEBUG",
                format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
                rotation="10 MB",
                retention="30 days",
                compression="gz"
            )
            logger.debug(f"File logging enabled: {log_file}")

    except (ConfigError, OSError) as e:
        # Don't fail the command if logging setup fails
        logger.warning(f"Failed to setup file logging: {e}")
