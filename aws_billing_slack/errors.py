"""
Exceptions raised by the billing report pipeline.
"""


class BillingReportError(Exception):
    """Base class for fatal billing report errors."""


class ConfigError(BillingReportError):
    """Required configuration is missing or invalid."""


class FetchError(BillingReportError):
    """The billing query failed or returned no usable time bucket."""


class DeliveryError(BillingReportError):
    """The Slack webhook rejected the message or could not be reached."""
