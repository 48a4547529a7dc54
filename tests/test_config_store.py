import json

import pytest

from koban import config_store
from koban.config_store import (
    API_TOKEN_ENV,
    BASE_URL_ENV,
    CONFIG_DIR_ENV,
    DEFAULT_BASE_URL,
    StoredConfig,
    TokenSource,
)
from koban.errors import CredentialError, MissingTokenError


@pytest.fixture
def store(tmp_path, monkeypatch):
    directory = tmp_path / "config"
    monkeypatch.setenv(CONFIG_DIR_ENV, str(directory))
    monkeypatch.delenv(API_TOKEN_ENV, raising=False)
    monkeypatch.delenv(BASE_URL_ENV, raising=False)
    return directory


def test_config_dir_override(store):
    assert config_store.config_dir() == store
    assert config_store.config_path() == store / "config.json"


def test_empty_config_dir_override_is_rejected(monkeypatch):
    monkeypatch.setenv(CONFIG_DIR_ENV, "")
    with pytest.raises(CredentialError, match="set but empty"):
        config_store.config_dir()


def test_save_then_resolve_uses_default_base_url(store):
    path = config_store.save(None, "token", False)
    assert path == store / "config.json"
    assert config_store.resolve() == (DEFAULT_BASE_URL, "token")


def test_saved_file_omits_unset_fields(store):
    path = config_store.save(None, "token", False)
    assert json.loads(path.read_text()) == {"api_token": "token"}


def test_saved_base_url_is_used_for_file_token(store):
    config_store.save("https://example.com", "token", False)
    assert config_store.resolve() == ("https://example.com", "token")
    assert config_store.stored_base_url() == "https://example.com"


def test_env_token_wins_and_ignores_stored_base_url(store, monkeypatch):
    config_store.save("https://example.com", "token", False)
    monkeypatch.setenv(API_TOKEN_ENV, "secret")
    assert config_store.resolve() == (DEFAULT_BASE_URL, "secret")


def test_env_base_url_wins(store, monkeypatch):
    config_store.save("https://example.com", "token", False)
    monkeypatch.setenv(BASE_URL_ENV, "https://billing.example.com")
    assert config_store.resolve() == ("https://billing.example.com", "token")


def test_missing_token(store):
    with pytest.raises(MissingTokenError):
        config_store.resolve()


def test_blank_file_token_counts_as_missing(store):
    store.mkdir()
    (store / "config.json").write_text(json.dumps({"api_token": "   "}))
    with pytest.raises(MissingTokenError):
        config_store.resolve()
    assert config_store.status().source is TokenSource.NONE


def test_corrupt_config_is_reported(store):
    store.mkdir()
    (store / "config.json").write_text("{not json")
    with pytest.raises(CredentialError, match="could not parse"):
        config_store.resolve()


def test_keychain_storage_is_unavailable(store):
    with pytest.raises(CredentialError, match="keychain"):
        config_store.save(None, "token", True)


def test_keychain_backed_config_is_reported(store):
    store.mkdir()
    (store / "config.json").write_text(json.dumps({"keychain": True}))
    with pytest.raises(CredentialError):
        config_store.resolve()
    with pytest.raises(CredentialError):
        config_store.status()


def test_status_reports_sources(store, monkeypatch):
    assert config_store.status().source.label() == "none"
    config_store.save("https://example.com", "token", False)
    file_status = config_store.status()
    assert file_status.source.label() == "config file"
    assert file_status.base_url == "https://example.com"
    assert file_status.config_path == store / "config.json"
    monkeypatch.setenv(API_TOKEN_ENV, "secret")
    env_status = config_store.status()
    assert env_status.source.label() == "environment"
    assert env_status.base_url == DEFAULT_BASE_URL


def test_clear_removes_file_without_base_url(store):
    path = config_store.save(None, "token", False)
    assert config_store.clear() is True
    assert not path.exists()
    assert config_store.clear() is False


def test_clear_keeps_base_url(store):
    path = config_store.save("https://example.com", "token", False)
    assert config_store.clear() is True
    assert path.exists()
    assert config_store.stored_base_url() == "https://example.com"
    with pytest.raises(MissingTokenError):
        config_store.resolve()


def test_save_keeps_previous_base_url(store):
    config_store.save("https://example.com", "token", False)
    config_store.save(None, "secret", False)
    assert config_store.resolve() == ("https://example.com", "secret")


def test_stored_config_round_trip():
    stored = StoredConfig(base_url="https://example.com", api_token="token", keychain=True)
    assert StoredConfig.from_dict(stored.to_dict()) == stored


def test_stored_config_rejects_wrong_types():
    with pytest.raises(ValueError):
        StoredConfig.from_dict({"keychain": "yes"})


def test_token_source_labels():
    assert TokenSource.KEYCHAIN.label() == "keychain"
    assert TokenSource.FILE.label() == "config file"