"""
Slack webhook delivery.
"""

import json
from typing import Any, Dict
import logging

import requests

from aws_billing_slack.errors import DeliveryError

logger = logging.getLogger(__name__)

TIMEOUT_SECONDS = 15


def send_slack(webhook_url: str, payload: Dict[str, Any]) -> None:
    """Post a Block Kit payload to a Slack incoming webhook as form data."""
    try:
        response = requests.post(
            webhook_url,
            data={"payload": json.dumps(payload)},
            timeout=TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        raise DeliveryError(f"Error sending Slack notification: {e}") from e

    if response.status_code >= 400:
        raise DeliveryError(
            f"Error sending msg. ({response.text}) Status: {response.status_code}"
        )

    logger.info("Slack notification sent successfully")
