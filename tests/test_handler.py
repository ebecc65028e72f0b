import logging
from unittest.mock import MagicMock, patch

import pytest

from aws_billing_slack import handler
from aws_billing_slack.errors import DeliveryError


def _ce():
    ce = MagicMock()
    ce.get_cost_and_usage.return_value = {
        "ResultsByTime": [{"Groups": [{"Keys": ["EC2"], "Metrics": {"UnblendedCost": {"Amount": "12.5"}}}]}]
    }
    return ce


@patch("aws_billing_slack.runner.send_slack")
@patch("aws_billing_slack.runner.boto3")
def test_lambda_handler_returns_summary(mock_boto3, mock_send, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SLACK_WEBHOOK_URL", "https://hooks.slack.com/services/T0/B0/X")
    mock_boto3.client.return_value = _ce()

    result = handler.lambda_handler({}, None)

    assert result["total"] == "12.50"
    assert result["services"] == 1
    assert result["skipped"] == 0
    mock_send.assert_called_once()


@patch("aws_billing_slack.runner.send_slack")
@patch("aws_billing_slack.runner.boto3")
def test_lambda_handler_propagates_errors(mock_boto3, mock_send, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SLACK_WEBHOOK_URL", "https://hooks.slack.com/services/T0/B0/X")
    mock_boto3.client.return_value = _ce()
    mock_send.side_effect = DeliveryError("Status: 404")

    with pytest.raises(DeliveryError):
        handler.lambda_handler({}, None)


@pytest.mark.parametrize(
    "name, expected",
    [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), (" error ", logging.ERROR), ("verbose", logging.INFO), ("", logging.INFO)],
)
def test_log_level_falls_back_to_info(name: str, expected: int) -> None:
    assert handler._log_level(name) == expected
