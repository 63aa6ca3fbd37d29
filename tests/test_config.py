from feescope.core.config import Settings
from feescope.core.container import build_pipeline_config


def test_defaults_cover_five_chains(monkeypatch):
    monkeypatch.delenv("COVALENT_API_KEY", raising=False)
    settings = Settings(_env_file=None)

    config = build_pipeline_config(settings)

    assert [chain.slug for chain in config.chains] == [
        "eth-mainnet",
        "matic-mainnet",
        "optimism-mainnet",
        "arbitrum-mainnet",
        "base-mainnet",
    ]
    assert config.api_key is None
    assert config.chain_timeout_seconds == 120
    assert settings.covalent.page_size == 1000
    assert settings.freshness_minutes == 60


def test_bare_environment_names_are_honoured(monkeypatch):
    monkeypatch.setenv("COVALENT_API_KEY", "ckey_test")
    monkeypatch.setenv("CRON_SECRET", "nightly")
    settings = Settings(_env_file=None)

    assert settings.api_key == "ckey_test"
    assert settings.cron_secret == "nightly"


def test_nested_sections_read_from_environment(monkeypatch):
    monkeypatch.setenv("REFRESH__CONCURRENCY", "3")
    monkeypatch.setenv("CACHE__FRESHNESS_MINUTES", "15")
    settings = Settings(_env_file=None)

    assert settings.refresh.concurrency == 3
    assert settings.freshness_minutes == 15
