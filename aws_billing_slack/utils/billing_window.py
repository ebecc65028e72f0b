from __future__ import annotations

import datetime as dt
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil.relativedelta import relativedelta

from aws_billing_slack.errors import ConfigError
from aws_billing_slack.models import BillingWindow

DEFAULT_TIMEZONE = "Asia/Tokyo"


def resolve_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"Unknown timezone: {name!r}") from e


def month_window(day: dt.date) -> BillingWindow:
    """Window covering the calendar month that contains ``day``."""
    start = day.replace(day=1)
    end = start + relativedelta(months=1) - relativedelta(days=1)
    return BillingWindow(start=start, end=end)


def current_billing_window(
    now: Optional[dt.datetime] = None,
    tz: str = DEFAULT_TIMEZONE,
) -> BillingWindow:
    """Billing window for "this month" as seen from ``tz``, not from the host clock's zone.

    A naive ``now`` is taken to be UTC.
    """
    zone = resolve_timezone(tz)
    if now is None:
        now = dt.datetime.now(dt.timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=dt.timezone.utc)
    return month_window(now.astimezone(zone).date())
