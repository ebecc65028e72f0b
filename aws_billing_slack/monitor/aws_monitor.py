"""
AWS billing data via Cost Explorer and CloudWatch.
"""

import datetime as dt
from decimal import Decimal
from typing import Any, Dict, List, Optional
import logging

from botocore.exceptions import BotoCoreError, ClientError

from aws_billing_slack.errors import FetchError
from aws_billing_slack.models import BillingWindow, ServiceCost

logger = logging.getLogger(__name__)

METRIC = "UnblendedCost"
UNKNOWN_SERVICE = "Unknown"


def _parse_group(group: Dict[str, Any]) -> ServiceCost:
    keys = group.get("Keys") or []
    name = str(keys[0]) if keys else UNKNOWN_SERVICE
    metric = (group.get("Metrics") or {}).get(METRIC) or {}
    return ServiceCost(name=name, amount=str(metric.get("Amount") or ""))


def fetch_service_costs(ce_client: Any, window: BillingWindow) -> List[ServiceCost]:
    """Query this window's unblended cost grouped by service."""
    params = {
        "TimePeriod": window.as_time_period(),
        "Granularity": "MONTHLY",
        "Metrics": [METRIC],
        "GroupBy": [{"Type": "DIMENSION", "Key": "SERVICE"}],
    }

    try:
        logger.info(f"Querying Cost Explorer for {window.start} to {window.end}")
        response = ce_client.get_cost_and_usage(**params)
    except (BotoCoreError, ClientError) as e:
        raise FetchError(f"Failed to get AWS usage charges for each service: {e}") from e

    results = response.get("ResultsByTime") or []
    if not results:
        raise FetchError("Cost Explorer returned no ResultsByTime")

    if response.get("NextPageToken"):
        logger.warning("Cost Explorer response is paginated; only the first page is reported")

    services = [_parse_group(g) for g in results[0].get("Groups") or []]
    logger.info(f"Retrieved costs for {len(services)} services")
    return services


def fetch_estimated_charges(cloudwatch_client: Any, now: Optional[dt.datetime] = None) -> Decimal:
    """Latest EstimatedCharges (USD) reported by CloudWatch in the last 24 hours."""
    if now is None:
        now = dt.datetime.now(dt.timezone.utc)

    try:
        response = cloudwatch_client.get_metric_statistics(
            Namespace="AWS/Billing",
            MetricName="EstimatedCharges",
            Dimensions=[{"Name": "Currency", "Value": "USD"}],
            StartTime=now - dt.timedelta(hours=24),
            EndTime=now,
            Period=86400,
            Statistics=["Maximum"],
        )
    except (BotoCoreError, ClientError) as e:
        raise FetchError(f"Failed to get metric statistics: {e}") from e

    datapoints = response.get("Datapoints") or []
    if not datapoints:
        raise FetchError("CloudWatch returned no EstimatedCharges datapoints")

    latest = max(datapoints, key=lambda d: d.get("Timestamp") or dt.datetime.min.replace(tzinfo=dt.timezone.utc))
    maximum = latest.get("Maximum")
    if maximum is None:
        raise FetchError("EstimatedCharges datapoint has no Maximum")

    return Decimal(str(maximum))
