from review_relay.config.settings import Settings
from review_relay.database.db import build_database_url


def test_relay_settings_defaults(monkeypatch) -> None:
    for name in (
        "SLACK_WEBHOOK_URL",
        "RELAY_SECRET",
        "RELAY_SECRET_HEADER",
        "REQUIRE_CATEGORY",
        "MAINTENANCE_MODE",
        "WEBHOOK_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.slack_webhook_url is None
    assert settings.relay_secret is None
    assert settings.relay_secret_header == "X-Relay-Secret"
    assert settings.require_category is False
    assert settings.maintenance_mode is False
    assert settings.webhook_timeout_seconds is None


def test_relay_settings_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("SLACK_WEBHOOK_URL", "https://hooks.example.test/x")
    monkeypatch.setenv("RELAY_SECRET", "super-secret")  # pragma: allowlist secret
    monkeypatch.setenv("REQUIRE_CATEGORY", "true")
    monkeypatch.setenv("MAINTENANCE_MODE", "1")
    monkeypatch.setenv("WEBHOOK_TIMEOUT_SECONDS", "3")

    settings = Settings(_env_file=None)

    assert settings.slack_webhook_url == "https://hooks.example.test/x"
    assert settings.relay_secret == "super-secret"  # pragma: allowlist secret
    assert settings.require_category is True
    assert settings.maintenance_mode is True
    assert settings.webhook_timeout_seconds == 3.0


def test_missing_required_lists_unset_values() -> None:
    settings = Settings(
        _env_file=None,
        database_url="postgresql://relay@db.internal/relay",
        slack_webhook_url=None,
        relay_secret=None,
        database_access_key=None,
    )

    assert settings.missing_required() == [
        "SLACK_WEBHOOK_URL",
        "RELAY_SECRET",
        "DATABASE_ACCESS_KEY",
    ]


def test_missing_required_accepts_password_in_url() -> None:
    settings = Settings(
        _env_file=None,
        database_url="postgresql://relay:pw@db.internal/relay",  # pragma: allowlist secret
        slack_webhook_url="https://hooks.example.test/x",
        relay_secret="s",
    )

    assert settings.missing_required() == []


def test_sqlite_needs_no_access_key() -> None:
    settings = Settings(
        _env_file=None,
        database_url="sqlite://",
        slack_webhook_url="https://hooks.example.test/x",
        relay_secret="s",
    )

    assert settings.missing_required() == []


def test_access_key_is_injected_into_url() -> None:
    settings = Settings(
        _env_file=None,
        database_url="postgresql://relay@db.internal:5432/relay",
        database_access_key="k3y",  # pragma: allowlist secret
    )

    url = build_database_url(settings)

    assert url.password == "k3y"  # pragma: allowlist secret
    assert url.host == "db.internal"
    assert url.username == "relay"


def test_url_without_access_key_is_unchanged() -> None:
    settings = Settings(_env_file=None, database_url="sqlite:///relay.db")

    assert build_database_url(settings).database == "relay.db"
