"""
AWS Billing Slack Report.

Posts the current month's AWS charges, broken down by service, to a Slack webhook.
"""

__version__ = "1.0.0"
__author__ = "Platform Engineering"
