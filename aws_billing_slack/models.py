from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List


@dataclass(frozen=True)
class BillingWindow:
    start: dt.date
    end: dt.date

    def as_time_period(self) -> Dict[str, str]:
        """Cost Explorer TimePeriod for this window."""
        return {"Start": self.start.isoformat(), "End": self.end.isoformat()}


@dataclass(frozen=True)
class ServiceCost:
    name: str
    amount: str


@dataclass(frozen=True)
class CostTotal:
    total: Decimal
    skipped: int = 0


@dataclass
class CostReport:
    window: BillingWindow
    total: Decimal
    services: List[ServiceCost] = field(default_factory=list)
    skipped: int = 0

    def summary(self) -> Dict[str, Any]:
        return {
            "window": {"start": self.window.start.isoformat(), "end": self.window.end.isoformat()},
            "total": f"{self.total:.2f}",
            "services": len(self.services),
            "skipped": self.skipped,
        }
