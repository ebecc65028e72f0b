"""
Fetch -> aggregate -> format -> deliver, once per invocation.
"""

import datetime as dt
from typing import Any, Dict, Optional, Tuple
import logging

import boto3

from aws_billing_slack.config import Settings
from aws_billing_slack.messaging.blocks import format_slack_message
from aws_billing_slack.messaging.notifiers import send_slack
from aws_billing_slack.models import CostReport
from aws_billing_slack.monitor.aws_monitor import fetch_estimated_charges, fetch_service_costs
from aws_billing_slack.report.aggregate import aggregate
from aws_billing_slack.utils.billing_window import current_billing_window

logger = logging.getLogger(__name__)


def build_report(
    settings: Settings,
    ce_client: Any = None,
    cloudwatch_client: Any = None,
    now: Optional[dt.datetime] = None,
) -> CostReport:
    """Query this month's costs and work out the total."""
    if ce_client is None:
        ce_client = boto3.client("ce", region_name=settings.aws_region)

    window = current_billing_window(now, settings.timezone)
    services = fetch_service_costs(ce_client, window)
    summed = aggregate(services)
    total = summed.total

    if settings.total_source == "cloudwatch":
        if cloudwatch_client is None:
            cloudwatch_client = boto3.client("cloudwatch", region_name=settings.cloudwatch_region)
        total = fetch_estimated_charges(cloudwatch_client, now)
        logger.info(f"Using CloudWatch EstimatedCharges {total:.2f} as total")

    return CostReport(window=window, total=total, services=services, skipped=summed.skipped)


def run_billing_report(
    settings: Settings,
    *,
    ce_client: Any = None,
    cloudwatch_client: Any = None,
    now: Optional[dt.datetime] = None,
    dry_run: bool = False,
) -> Tuple[CostReport, Dict[str, Any]]:
    """Build the report and post it to Slack unless ``dry_run``."""
    settings.validate(require_webhook=not dry_run)

    report = build_report(settings, ce_client, cloudwatch_client, now)
    payload = format_slack_message(
        report.total,
        report.services,
        skipped=report.skipped,
        console_url=settings.console_url,
        currency=settings.currency,
    )

    if dry_run:
        logger.info("Dry-run mode: Slack notification not sent")
    else:
        send_slack(settings.slack_webhook_url, payload)

    return report, payload
