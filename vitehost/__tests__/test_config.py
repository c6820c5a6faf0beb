from pathlib import Path

import pytest
from pydantic import ValidationError

from vitehost.config import AppConfig
from vitehost.tags import AssetMode


def test_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)

    config = AppConfig()

    assert config.is_development
    assert config.asset_mode == AssetMode.DEVELOPMENT
    assert config.VITE_ORIGIN == "http://localhost:5173"
    assert config.PORT == 8080
    assert config.PROJECT_ROOT == tmp_path
    assert config.web_root == tmp_path / "web" / "src"
    assert not config.tls_enabled


def test_production_paths(tmp_path: Path):
    config = AppConfig(APP_ENV="production", PROJECT_ROOT=tmp_path)

    assert not config.is_development
    assert config.asset_mode == AssetMode.PRODUCTION
    assert config.web_root == tmp_path / "web" / "out"
    assert config.manifest_path == tmp_path / "web" / "out" / ".vite" / "manifest.json"


@pytest.mark.parametrize("app_env", ["development", "staging", "", "Production"])
def test_anything_but_production_is_development(app_env: str):
    assert AppConfig(APP_ENV=app_env).is_development


def test_reads_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("CERT_FILE", "/etc/ssl/site.pem")
    monkeypatch.setenv("KEY_FILE", "/etc/ssl/site.key")
    monkeypatch.setenv("DOMAIN_NAME", "example.com")
    monkeypatch.setenv("PROJECT_ROOT", str(tmp_path))
    monkeypatch.setenv("PORT", "9000")

    config = AppConfig()

    assert config.CERT_FILE == "/etc/ssl/site.pem"
    assert config.KEY_FILE == "/etc/ssl/site.key"
    assert config.DOMAIN_NAME == "example.com"
    assert config.PROJECT_ROOT == tmp_path
    assert config.PORT == 9000
    assert config.tls_enabled


@pytest.mark.parametrize(
    "overrides, expected_tls",
    [
        (
            dict(CERT_FILE="c.pem", KEY_FILE="k.pem", DOMAIN_NAME="example.com"),
            True,
        ),
        (dict(CERT_FILE="c.pem", KEY_FILE="k.pem"), False),
        (dict(CERT_FILE="c.pem", DOMAIN_NAME="example.com"), False),
        (dict(KEY_FILE="k.pem", DOMAIN_NAME="example.com"), False),
    ],
)
def test_tls_requires_all_settings(overrides: dict[str, str], expected_tls: bool):
    assert AppConfig(APP_ENV="production", **overrides).tls_enabled == expected_tls


def test_tls_disabled_in_development():
    config = AppConfig(CERT_FILE="c.pem", KEY_FILE="k.pem", DOMAIN_NAME="example.com")
    assert not config.tls_enabled


def test_frozen():
    config = AppConfig()
    with pytest.raises(ValidationError):
        config.APP_ENV = "production"  # type: ignore


def test_invalid_port(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PORT", "not-a-port")
    with pytest.raises(ValidationError):
        AppConfig()
