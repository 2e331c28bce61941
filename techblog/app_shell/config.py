import logging
import os
import sys
from pathlib import Path

from techblog.rules.models import Rules

logger = logging.getLogger(__name__)


def validate_ops_rules(rules: Rules, data_dir: Path) -> None:
    """
    Validate operational requirements before startup.
    Exits the process when a requirement is not met.
    """
    ops = rules.ops

    # 1. Data dir must exist (created on demand) and be writable
    if ops.data_dir_required:
        data_dir.mkdir(parents=True, exist_ok=True)
        if not os.access(data_dir, os.W_OK):
            logger.critical("Data directory is not writable: %s", data_dir)
            sys.exit(1)

    # 2. Required env
    missing = [name for name in ops.required_env if name not in os.environ]
    if missing:
        logger.critical("Missing required environment variables: %s", ", ".join(missing))
        sys.exit(1)

    logger.info("Configuration validated.")
