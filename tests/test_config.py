import pytest

from aws_billing_slack.config import Settings, load_settings
from aws_billing_slack.errors import ConfigError


def test_defaults() -> None:
    s = Settings.from_env({})
    assert s.slack_webhook_url is None
    assert s.timezone == "Asia/Tokyo"
    assert s.total_source == "services"
    assert s.currency == "USD"


def test_from_env_ignores_blank_values() -> None:
    s = Settings.from_env({"SLACK_WEBHOOK_URL": " https://hooks.example/x ", "BILLING_TIMEZONE": "  "})
    assert s.slack_webhook_url == "https://hooks.example/x"
    assert s.timezone == "Asia/Tokyo"


def test_validate_requires_webhook() -> None:
    with pytest.raises(ConfigError, match="SLACK_WEBHOOK_URL"):
        Settings().validate()
    Settings().validate(require_webhook=False)


def test_validate_total_source() -> None:
    with pytest.raises(ConfigError, match="total_source"):
        Settings(slack_webhook_url="https://x", total_source="forecast").validate()


def test_validate_timezone() -> None:
    with pytest.raises(ConfigError):
        Settings(slack_webhook_url="https://x", timezone="Nowhere/City").validate()


def test_masked_hides_webhook() -> None:
    data = Settings(slack_webhook_url="https://hooks.slack.com/services/T0/B0/secret").masked()
    assert "secret" not in data["slack_webhook_url"]
    assert data["timezone"] == "Asia/Tokyo"


def test_load_settings_yaml_with_env_override(tmp_path) -> None:
    path = tmp_path / "settings.yml"
    path.write_text("timezone: UTC\ntotal_source: cloudwatch\nslack_webhook_url: https://from-file\n", encoding="utf-8")

    s = load_settings(str(path), environ={"SLACK_WEBHOOK_URL": "https://from-env"})

    assert s.timezone == "UTC"
    assert s.total_source == "cloudwatch"
    assert s.slack_webhook_url == "https://from-env"


def test_load_settings_unknown_key(tmp_path) -> None:
    path = tmp_path / "settings.yml"
    path.write_text("webhook: https://x\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="webhook"):
        load_settings(str(path), environ={})


def test_load_settings_invalid_yaml(tmp_path) -> None:
    path = tmp_path / "settings.yml"
    path.write_text("timezone: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_settings(str(path), environ={})


def test_load_settings_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(str(tmp_path / "missing.yml"), environ={})


def test_load_settings_without_file() -> None:
    assert load_settings(None, environ={"AWS_REGION": "us-east-1"}).aws_region == "us-east-1"
