"""
Runtime settings for the billing report.

Values come from an optional YAML file, overridden by environment variables.
"""

from __future__ import annotations

import os
import pathlib
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Mapping, Optional

import yaml

from aws_billing_slack.errors import ConfigError
from aws_billing_slack.messaging.blocks import CONSOLE_URL
from aws_billing_slack.utils.billing_window import DEFAULT_TIMEZONE, resolve_timezone

TOTAL_SOURCES = ("services", "cloudwatch")

# field name -> environment variable
ENV_VARS = {
    "slack_webhook_url": "SLACK_WEBHOOK_URL",
    "timezone": "BILLING_TIMEZONE",
    "aws_region": "AWS_REGION",
    "currency": "BILLING_CURRENCY",
    "console_url": "BILLING_CONSOLE_URL",
    "total_source": "BILLING_TOTAL_SOURCE",
    "cloudwatch_region": "BILLING_CLOUDWATCH_REGION",
}


@dataclass(frozen=True)
class Settings:
    slack_webhook_url: Optional[str] = None
    timezone: str = DEFAULT_TIMEZONE
    aws_region: Optional[str] = None
    currency: str = "USD"
    console_url: str = CONSOLE_URL
    total_source: str = "services"
    cloudwatch_region: str = "us-east-1"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        return cls().with_env(environ)

    def with_env(self, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Copy of these settings with non-blank environment values applied on top."""
        if environ is None:
            environ = os.environ
        overrides: Dict[str, Any] = {}
        for name, var in ENV_VARS.items():
            v = environ.get(var)
            if v and v.strip():
                overrides[name] = v.strip()
        return replace(self, **overrides)

    def validate(self, require_webhook: bool = True) -> "Settings":
        if require_webhook and not self.slack_webhook_url:
            raise ConfigError("SLACK_WEBHOOK_URL not set")
        if self.total_source not in TOTAL_SOURCES:
            raise ConfigError(
                f"Unknown total_source {self.total_source!r}; expected one of {', '.join(TOTAL_SOURCES)}"
            )
        resolve_timezone(self.timezone)
        return self

    def masked(self) -> Dict[str, Any]:
        """Settings as a dict, safe to print."""
        data = asdict(self)
        if data.get("slack_webhook_url"):
            data["slack_webhook_url"] = "https://hooks.slack.com/services/****"
        return data


def load_config(path: str) -> Dict[str, Any]:
    """Load YAML configuration file."""
    config_path = pathlib.Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e


def load_settings(
    path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    settings = Settings()
    if path:
        data = load_config(path)
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file must contain a mapping: {path}")
        unknown = sorted(set(data) - set(ENV_VARS))
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        settings = Settings(**{k: str(v) for k, v in data.items() if v is not None})
    return settings.with_env(environ)
