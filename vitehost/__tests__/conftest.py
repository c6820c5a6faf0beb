from json import dumps as json_dumps
from pathlib import Path

import pytest

from vitehost.config import AppConfig

CONFIG_ENV_VARS = [
    "APP_ENV",
    "CERT_FILE",
    "KEY_FILE",
    "DOMAIN_NAME",
    "VITE_ORIGIN",
    "PROJECT_ROOT",
    "HOST",
    "PORT",
]

BASE_TEMPLATE = """<!doctype html>
<html>
<head>
{% if title %}<title>{{ title }}</title>{% endif %}
{{ vite_head }}
</head>
<body data-dev="{{ is_dev }}" data-url="{{ protocol }}://{{ host }}{{ page }}">
{% block content %}{% endblock %}
</body>
</html>
"""

EXAMPLE_MANIFEST = {
    "ts/main.ts": {
        "file": "assets/main.abc123.js",
        "src": "ts/main.ts",
        "css": ["assets/main.abc123.css"],
        "isEntry": True,
    },
    "ts/cards/index.ts": {
        "file": "assets/cards.def456.js",
        "src": "ts/cards/index.ts",
        "isEntry": True,
    },
}


@pytest.fixture(autouse=True)
def isolate_config_env(monkeypatch: pytest.MonkeyPatch):
    for key in CONFIG_ENV_VARS:
        monkeypatch.delenv(key, raising=False)


def write_web_root(web_root: Path):
    templates = web_root / "templates"
    templates.mkdir(parents=True)
    (templates / "base.html").write_text(BASE_TEMPLATE)
    (templates / "index.html").write_text(
        '{% extends "base.html" %}{% block content %}<h1>Home</h1>{% endblock %}'
    )
    (templates / "cards.html").write_text(
        '{% extends "base.html" %}{% block content %}<h1>Cards</h1>{% endblock %}'
    )

    static = web_root / "static" / "assets" / "img"
    static.mkdir(parents=True)
    (static / "favicon.ico").write_bytes(b"icon")


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """
    Project with both a development and a built production web root.

    """
    write_web_root(tmp_path / "web" / "src")

    out_root = tmp_path / "web" / "out"
    write_web_root(out_root)
    (out_root / ".vite").mkdir()
    (out_root / ".vite" / "manifest.json").write_text(json_dumps(EXAMPLE_MANIFEST))
    (out_root / "assets").mkdir()
    (out_root / "assets" / "main.abc123.js").write_text("console.log('main')")

    return tmp_path


@pytest.fixture
def dev_config(project_root: Path) -> AppConfig:
    return AppConfig(PROJECT_ROOT=project_root)


@pytest.fixture
def prod_config(project_root: Path) -> AppConfig:
    return AppConfig(APP_ENV="production", PROJECT_ROOT=project_root)
