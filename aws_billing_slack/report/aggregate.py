"""
Reduce per-service costs to a single total.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional
import logging

from aws_billing_slack.models import CostTotal, ServiceCost

logger = logging.getLogger(__name__)

# Plain ASCII decimal, optional exponent. No grouping separators, no surrounding whitespace.
AMOUNT_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


def parse_amount(raw: Optional[str]) -> Optional[Decimal]:
    """Parse a Cost Explorer amount string; None when it is not a finite number."""
    if raw is None or not AMOUNT_RE.fullmatch(str(raw)):
        return None
    try:
        value = Decimal(str(raw))
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    return value


def aggregate(services: Iterable[ServiceCost]) -> CostTotal:
    """Sum service amounts. Malformed amounts count as zero and are reported in ``skipped``."""
    total = Decimal("0")
    skipped = 0

    for service in services:
        value = parse_amount(service.amount)
        if value is None:
            logger.warning(f"Unparseable amount {service.amount!r} for {service.name}; counting as 0")
            skipped += 1
            continue
        total += value

    logger.info(f"Aggregated total {total:.2f} ({skipped} skipped)")
    return CostTotal(total=total, skipped=skipped)
