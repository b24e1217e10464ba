"""Shared fixtures: a throwaway site tree and clients bound to it."""

from pathlib import Path

import pytest
from httpx import AsyncClient, ASGITransport

from spa_server.config import Settings
from spa_server.main import create_app

INDEX_HTML = b"<!doctype html><html><body><div id=root></div></body></html>"
ABOUT_HTML = b"<html><body>About</body></html>"
LOGO_PNG = b"\x89PNG\r\n\x1a\nfake-logo"
APP_JS = b"console.log('app');"
SECRET = b"top secret"


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """Build::

        tmp/secret.txt                      outside every root
        tmp/site/build/client/index.html
        tmp/site/build/client/about.html
        tmp/site/build/client/shared.txt    also in public/
        tmp/site/build/client/assets/app.3f2a9c.js
        tmp/site/build/client/assets/nested/
        tmp/site/public/logo.png
        tmp/site/public/shared.txt
        tmp/site/public/docs/
    """
    (tmp_path / "secret.txt").write_bytes(SECRET)

    root = tmp_path / "site"
    client = root / "build" / "client"
    public = root / "public"
    (client / "assets" / "nested").mkdir(parents=True)
    (public / "docs").mkdir(parents=True)

    (client / "index.html").write_bytes(INDEX_HTML)
    (client / "about.html").write_bytes(ABOUT_HTML)
    (client / "shared.txt").write_bytes(b"client")
    (client / "assets" / "app.3f2a9c.js").write_bytes(APP_JS)
    (public / "logo.png").write_bytes(LOGO_PNG)
    (public / "shared.txt").write_bytes(b"public")
    (public / "docs" / "guide.txt").write_bytes(b"guide")
    return root


def make_settings(site: Path, **overrides) -> Settings:
    values = {
        "CLIENT_DIR": str(site / "build" / "client"),
        "PUBLIC_DIR": str(site / "public"),
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings(site):
    return make_settings(site)


@pytest.fixture
async def client(settings):
    transport = ASGITransport(app=create_app(settings))
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
