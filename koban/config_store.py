"""Local credential storage and resolution.

Resolution precedence (highest first): environment variables, the OS
keychain when the stored config points at it, then the stored config file.
"""

from __future__ import annotations

import enum
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from koban.errors import CredentialError, MissingTokenError

API_TOKEN_ENV = "INVOICE_NINJA_API_TOKEN"
BASE_URL_ENV = "INVOICE_NINJA_BASE_URL"
DEFAULT_BASE_URL = "https://invoicing.co"

CONFIG_DIR_ENV = "KOBAN_CONFIG_DIR"
CONFIG_FILE = "config.json"


@dataclass
class StoredConfig:
    """On-disk credential record."""

    base_url: str | None = None
    api_token: str | None = None
    keychain: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.base_url is not None:
            data["base_url"] = self.base_url
        if self.api_token is not None:
            data["api_token"] = self.api_token
        if self.keychain:
            data["keychain"] = True
        return data

    @classmethod
    def from_dict(cls, data: Any) -> StoredConfig:
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        base_url = data.get("base_url")
        api_token = data.get("api_token")
        keychain = data.get("keychain", False)
        for name, value in (("base_url", base_url), ("api_token", api_token)):
            if value is not None and not isinstance(value, str):
                raise ValueError(f"`{name}` must be a string")
        if not isinstance(keychain, bool):
            raise ValueError("`keychain` must be a boolean")
        return cls(base_url=base_url, api_token=api_token, keychain=keychain)


class TokenSource(enum.Enum):
    """Where a resolved token came from."""

    ENV = "env"
    KEYCHAIN = "keychain"
    FILE = "file"
    NONE = "none"

    def label(self) -> str:
        return _SOURCE_LABELS[self]


_SOURCE_LABELS = {
    TokenSource.ENV: "environment",
    TokenSource.KEYCHAIN: "keychain",
    TokenSource.FILE: "config file",
    TokenSource.NONE: "none",
}


@dataclass(frozen=True)
class AuthStatus:
    """Active credential source; never holds the token itself."""

    source: TokenSource
    base_url: str
    config_path: Path


def config_dir() -> Path:
    """Return the config directory, honouring ``KOBAN_CONFIG_DIR``."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override is not None:
        if not override:
            raise CredentialError(f"{CONFIG_DIR_ENV} is set but empty")
        return Path(override)
    try:
        return Path(user_config_dir("koban", appauthor=False))
    except Exception as error:  # platform lookup failure
        raise CredentialError(
            "could not determine a config directory for this platform"
        ) from error


def config_path() -> Path:
    return config_dir() / CONFIG_FILE


def _load_file() -> StoredConfig:
    path = config_path()
    try:
        contents = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return StoredConfig()
    except OSError as error:
        raise CredentialError(f"could not read {path}: {error}") from error
    try:
        return StoredConfig.from_dict(json.loads(contents))
    except ValueError as error:
        raise CredentialError(f"could not parse {path}: {error}") from error


def _write_file(path: Path, stored: StoredConfig) -> None:
    _write_secure(path, json.dumps(stored.to_dict(), indent=2))


def _write_secure(path: Path, contents: str) -> None:
    """Write ``contents`` with owner-only permissions where supported."""
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(contents)
    except OSError as error:
        raise CredentialError(f"could not write {path}: {error}") from error
    if os.name == "posix":
        try:
            os.chmod(path, 0o600)
        except OSError as error:
            raise CredentialError(
                f"could not set permissions on {path}: {error}"
            ) from error


def _keychain_set(token: str) -> None:
    raise CredentialError(
        "this build has no keychain support; store the token without --keychain"
    )


def _keychain_get() -> str | None:
    raise CredentialError(
        "this build has no keychain support; re-store the token without --keychain"
    )


def _keychain_delete() -> bool:
    return False


def _env_non_empty(key: str) -> str | None:
    value = os.environ.get(key)
    if value is None or not value.strip():
        return None
    return value


def save(base_url: str | None, token: str, use_keychain: bool) -> Path:
    """Persist a token and optional base URL; return the config file path."""
    directory = config_dir()
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise CredentialError(f"could not create {directory}: {error}") from error
    path = directory / CONFIG_FILE

    stored = _load_file()
    if base_url is not None:
        stored.base_url = base_url

    if use_keychain:
        _keychain_set(token)
        stored.keychain = True
        stored.api_token = None
    else:
        try:
            _keychain_delete()
        except CredentialError:
            pass
        stored.keychain = False
        stored.api_token = token

    _write_file(path, stored)
    return path


def _resolve_stored_token(stored: StoredConfig) -> tuple[TokenSource, str]:
    if stored.keychain:
        token = _keychain_get()
        if token is None:
            raise MissingTokenError()
        return TokenSource.KEYCHAIN, token
    if stored.api_token is not None and stored.api_token.strip():
        return TokenSource.FILE, stored.api_token
    raise MissingTokenError()


def _resolve_base_url(source: TokenSource, stored: StoredConfig) -> str:
    env_url = _env_non_empty(BASE_URL_ENV)
    if env_url is not None:
        return env_url
    if source in (TokenSource.KEYCHAIN, TokenSource.FILE) and stored.base_url is not None:
        return stored.base_url
    return DEFAULT_BASE_URL


def resolve() -> tuple[str, str]:
    """Return ``(base_url, token)`` from the highest-precedence source."""
    stored = _load_file()
    env_token = _env_non_empty(API_TOKEN_ENV)
    if env_token is not None:
        return _resolve_base_url(TokenSource.ENV, stored), env_token
    source, token = _resolve_stored_token(stored)
    return _resolve_base_url(source, stored), token


def stored_base_url() -> str | None:
    """Return the base URL recorded in the config file, if any."""
    return _load_file().base_url


def status() -> AuthStatus:
    """Report the active credential source without exposing the token."""
    stored = _load_file()
    if _env_non_empty(API_TOKEN_ENV) is not None:
        source = TokenSource.ENV
    elif stored.keychain:
        source = TokenSource.KEYCHAIN if _keychain_get() is not None else TokenSource.NONE
    elif stored.api_token is not None and stored.api_token.strip():
        source = TokenSource.FILE
    else:
        source = TokenSource.NONE
    return AuthStatus(
        source=source,
        base_url=_resolve_base_url(source, stored),
        config_path=config_path(),
    )


def clear() -> bool:
    """Remove stored credentials, keeping a stored base URL; report removal."""
    removed = _keychain_delete()

    path = config_path()
    if path.exists():
        stored = _load_file()
        if stored.api_token is not None or stored.keychain:
            removed = True
        stored.api_token = None
        stored.keychain = False

        if stored.base_url is not None:
            _write_file(path, stored)
        else:
            try:
                path.unlink()
            except OSError as error:
                raise CredentialError(f"could not remove {path}: {error}") from error

    return removed