"""
Lambda entry point, triggered by a schedule.
"""

import os
import logging

from aws_billing_slack.config import Settings
from aws_billing_slack.runner import run_billing_report


def _log_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


logging.getLogger().setLevel(_log_level(os.environ.get("LOG_LEVEL", "INFO")))
logger = logging.getLogger(__name__)


def lambda_handler(event, context):
    settings = Settings.from_env()
    report, _ = run_billing_report(settings)
    logger.info(f"Billing report sent for {report.window.start:%Y-%m}")
    return report.summary()
