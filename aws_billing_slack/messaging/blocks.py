"""
Slack Block Kit payload for the monthly billing report.
"""

from decimal import Decimal
from typing import Any, Dict, List, Sequence

from aws_billing_slack.models import ServiceCost
from aws_billing_slack.report.aggregate import parse_amount
from aws_billing_slack.utils.chunking import chunked

CONSOLE_URL = "https://console.aws.amazon.com/billing/home"
FIELDS_PER_SECTION = 2


def mrkdwn(text: str) -> Dict[str, str]:
    return {"type": "mrkdwn", "text": text}


def header_section(
    total: Decimal,
    *,
    skipped: int = 0,
    console_url: str = CONSOLE_URL,
    currency: str = "USD",
) -> Dict[str, Any]:
    text = (
        f"<{console_url}|AWS Billing Management Console>\n"
        f"*Total Cost(Monthly)* : {total:.2f} {currency}"
    )
    if skipped > 0:
        text += f"\n_{skipped} service amount(s) could not be parsed_"
    return {"type": "section", "text": mrkdwn(text)}


def service_text(service: ServiceCost, currency: str = "USD") -> Dict[str, str]:
    amount = parse_amount(service.amount) or Decimal("0")
    return mrkdwn(f"*{service.name}*\n{amount:.2f} {currency}")


def format_slack_message(
    total: Decimal,
    services: Sequence[ServiceCost],
    *,
    skipped: int = 0,
    console_url: str = CONSOLE_URL,
    currency: str = "USD",
) -> Dict[str, Any]:
    """Header section with the total, then services two per section in input order."""
    blocks: List[Dict[str, Any]] = [
        header_section(total, skipped=skipped, console_url=console_url, currency=currency)
    ]

    units = [service_text(s, currency) for s in services]
    for pair in chunked(units, FIELDS_PER_SECTION):
        blocks.append({"type": "section", "fields": pair})

    return {"blocks": blocks}
