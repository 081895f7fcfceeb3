"""资源服务测试"""

import logging
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from managerboot import __version__
from managerboot.loader import instantiate
from managerboot.web import create_app, module_url


@pytest.fixture
def module_path(compile_module):
    return compile_module("def run_app():\n    return 'served'\n")


@pytest.fixture
def client(module_path):
    return TestClient(create_app(module_path))


def test_module_url():
    assert module_url("static/pkg/thoth_manager_bg.pyc") == "/admin/thoth_manager_bg.pyc"
    assert module_url("m.pyc", prefix="/app/") == "/app/m.pyc"


class TestModuleRoute:
    def test_serves_module_bytes(self, client, module_path):
        response = client.get("/admin/thoth_manager_bg.pyc")
        assert response.status_code == 200
        assert response.content == Path(module_path).read_bytes()
        assert response.headers["content-type"] == "application/x-python-code"
        assert response.headers["cache-control"] == "no-cache"

    def test_module_file_removed(self, client, module_path):
        Path(module_path).unlink()
        response = client.get("/admin/thoth_manager_bg.pyc")
        assert response.status_code == 404
        assert response.headers["cache-control"] == "no-cache"

    def test_other_module_name_falls_back_to_index(self, client):
        response = client.get("/admin/other.pyc")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")


class TestManifestRoute:
    def test_manifest(self, client):
        response = client.get("/admin/manifest.json")
        assert response.status_code == 200
        assert response.headers["cache-control"] == "no-cache"

        data = response.json()
        assert data["name"] == "Thoth"
        assert data["version"] == __version__
        assert data["scope"] == "/admin"
        assert data["display"] == "standalone"
        assert data["theme_color"] == "#FFDD57"
        assert [icon["density"] for icon in data["icons"]] == [
            "0.75", "1.0", "1.5", "2.0", "3.0", "4.0",
        ]
        assert data["icons"][0]["src"] == "https://cdn.thoth.pub/android-icon-36x36.png"
        assert data["icons"][-1]["sizes"] == "192x192"


def test_cors_preflight(client):
    response = client.options(
        "/admin/manifest.json",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert response.status_code == 200
    assert "access-control-allow-origin" in response.headers


@pytest.mark.asyncio
async def test_instantiate_from_server(module_path):
    """bootstrap 通过 HTTP 从资源服务加载模块"""
    app = create_app(module_path)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport) as http:
        module = await instantiate(
            "http://assets.test/admin/thoth_manager_bg.pyc", client=http
        )
    assert module.run() == "served"


class TestIndexFallback:
    """未匹配路径返回 index 页面"""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert response.headers["cache-control"] == "no-cache"
        assert '<link rel="manifest" href="/admin/manifest.json">' in response.text
        assert "/admin/thoth_manager_bg.pyc" in response.text
        assert "run_app" in response.text

    def test_client_route(self, client):
        response = client.get("/admin/works/1234")
        assert response.status_code == 200
        assert f"Thoth {__version__}" in response.text
        assert "http://testserver/admin/thoth_manager_bg.pyc" in response.text


def test_access_log(client, caplog):
    with caplog.at_level(logging.INFO, logger="managerboot.web.app"):
        client.get("/admin/manifest.json", headers={"User-Agent": "test-agent"})
    record = next(r for r in caplog.records if '"GET /admin/manifest.json"' in r.getMessage())
    message = record.getMessage()
    assert message.startswith("[AssetServer] ")
    assert '"GET /admin/manifest.json" 200' in message
    assert '"test-agent"' in message
