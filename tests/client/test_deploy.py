"""Tests for the deployer, end to end against a mocked panel."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pytest

from panelrocket.client.api import PanelClient, RemoteError
from panelrocket.client.deploy import Deployer
from panelrocket.core.config import ConfigError, DeployConfig, EndpointConfig

SEARCH_URL = "http://panel.test/api/v1/websites/search"
UPLOAD_URL = "http://panel.test/api/v1/files/upload"


def make_config() -> EndpointConfig:
    """Create an EndpointConfig for testing."""
    return EndpointConfig(base_url="http://panel.test", api_key="secret")


def search_response(domain: str, site_path: str | None) -> dict[str, Any]:
    return {
        "code": 200,
        "message": "",
        "data": {"total": 1, "items": [{"id": 1, "primaryDomain": domain, "sitePath": site_path}]},
    }


def fast_config(**kwargs: Any) -> DeployConfig:
    """DeployConfig without retry delays."""
    return DeployConfig(retry_delay=0, **kwargs)


@pytest.fixture
def build_dir(tmp_path: Path) -> Path:
    """A small static build: index.html, assets/app.js and an ignored .env."""
    build = tmp_path / "dist"
    (build / "assets").mkdir(parents=True)
    (build / "index.html").write_text("<h1>home</h1>")
    (build / "assets" / "app.js").write_text("console.log('app')")
    (build / ".env").write_text("SECRET=1")
    return build


class TestDeployer:
    """Tests for Deployer.deploy."""

    @pytest.mark.asyncio
    async def test_deploy(self, httpx_mock, build_dir: Path) -> None:  # type: ignore[no-untyped-def]
        """Should upload every non-ignored file under site_path/index."""
        httpx_mock.add_response(
            url=SEARCH_URL, method="POST", json=search_response("x.com", "/www/sites/x.com")
        )
        httpx_mock.add_response(url=UPLOAD_URL, method="POST", json={"code": 200, "data": None})
        httpx_mock.add_response(url=UPLOAD_URL, method="POST", json={"code": 200, "data": None})

        async with PanelClient(make_config()) as client:
            summary = await Deployer(client, fast_config()).deploy("x.com", build_dir)

        assert summary.total_files == 2
        assert summary.success_count == 2
        assert summary.fail_count == 0
        assert summary.ok is True
        targets = {(o.file, o.target_path) for o in summary.details}
        assert targets == {
            ("app.js", "/www/sites/x.com/index/assets"),
            ("index.html", "/www/sites/x.com/index/"),
        }
        uploads = httpx_mock.get_requests(url=UPLOAD_URL)
        assert all(b"SECRET" not in r.content for r in uploads)

    @pytest.mark.asyncio
    async def test_partial_failure(self, httpx_mock, tmp_path: Path) -> None:  # type: ignore[no-untyped-def]
        """A file failing every attempt is counted, the rest still deploys."""
        (tmp_path / "a.txt").write_text("a")
        (tmp_path / "b.txt").write_text("b")
        httpx_mock.add_response(
            url=SEARCH_URL, method="POST", json=search_response("x.com", "/www/x")
        )
        httpx_mock.add_response(url=UPLOAD_URL, method="POST", json={"code": 200, "data": None})
        httpx_mock.add_response(url=UPLOAD_URL, method="POST", status_code=500)
        httpx_mock.add_response(url=UPLOAD_URL, method="POST", status_code=500)

        async with PanelClient(make_config()) as client:
            summary = await Deployer(client, fast_config(max_attempts=2)).deploy("x.com", tmp_path)

        assert summary.total_files == 2
        assert summary.success_count == 1
        assert summary.fail_count == 1
        assert [o.file for o in summary.failures] == ["b.txt"]
        assert "b.txt" in (summary.failures[0].error or "")

    @pytest.mark.asyncio
    async def test_site_not_found(self, httpx_mock, build_dir: Path) -> None:  # type: ignore[no-untyped-def]
        """Should raise ConfigError when the site does not exist."""
        httpx_mock.add_response(
            url=SEARCH_URL, method="POST", json=search_response("other.com", "/www/o")
        )

        async with PanelClient(make_config()) as client:
            with pytest.raises(ConfigError, match="Website not found"):
                await Deployer(client, fast_config()).deploy("x.com", build_dir)

    @pytest.mark.asyncio
    async def test_site_without_path(self, httpx_mock, build_dir: Path) -> None:  # type: ignore[no-untyped-def]
        """Should raise ConfigError when the site has no filesystem root."""
        httpx_mock.add_response(url=SEARCH_URL, method="POST", json=search_response("x.com", None))

        async with PanelClient(make_config()) as client:
            with pytest.raises(ConfigError, match="physical path"):
                await Deployer(client, fast_config()).deploy("x.com", build_dir)

    @pytest.mark.asyncio
    async def test_missing_source_dir(self, httpx_mock, tmp_path: Path) -> None:  # type: ignore[no-untyped-def]
        """Should raise ConfigError before uploading anything."""
        httpx_mock.add_response(
            url=SEARCH_URL, method="POST", json=search_response("x.com", "/www/x")
        )

        async with PanelClient(make_config()) as client:
            with pytest.raises(ConfigError, match="does not exist"):
                await Deployer(client, fast_config()).deploy("x.com", tmp_path / "missing")

    @pytest.mark.asyncio
    async def test_lookup_failure_propagates(self, httpx_mock, build_dir: Path) -> None:  # type: ignore[no-untyped-def]
        """Should let RemoteError from the site lookup abort the deployment."""
        httpx_mock.add_response(url=SEARCH_URL, method="POST", status_code=503)

        async with PanelClient(make_config()) as client:
            with pytest.raises(RemoteError):
                await Deployer(client, fast_config()).deploy("x.com", build_dir)

    @pytest.mark.asyncio
    async def test_custom_index_dir(self, httpx_mock, tmp_path: Path) -> None:  # type: ignore[no-untyped-def]
        """Should upload under the configured index directory."""
        (tmp_path / "index.html").write_text("hi")
        httpx_mock.add_response(
            url=SEARCH_URL, method="POST", json=search_response("x.com", "/www/x")
        )
        httpx_mock.add_response(url=UPLOAD_URL, method="POST", json={"code": 200, "data": None})

        async with PanelClient(make_config()) as client:
            summary = await Deployer(client, fast_config(index_dir="public")).deploy(
                "x.com", tmp_path
            )

        assert summary.details[0].target_path == "/www/x/public/"

    @pytest.mark.asyncio
    async def test_unencodable_file_name_does_not_abort(self, httpx_mock, tmp_path: Path) -> None:  # type: ignore[no-untyped-def]
        """A file whose name cannot be sent is a failed outcome, siblings still deploy."""
        bad_name = os.fsdecode(b"b\xff.txt")
        try:
            (tmp_path / bad_name).write_text("b")
        except (OSError, UnicodeError):
            pytest.skip("filesystem does not accept undecodable file names")
        (tmp_path / "a.txt").write_text("a")
        (tmp_path / "c.txt").write_text("c")
        httpx_mock.add_response(
            url=SEARCH_URL, method="POST", json=search_response("x.com", "/www/x")
        )
        httpx_mock.add_response(url=UPLOAD_URL, method="POST", json={"code": 200, "data": None})
        httpx_mock.add_response(url=UPLOAD_URL, method="POST", json={"code": 200, "data": None})

        async with PanelClient(make_config()) as client:
            summary = await Deployer(client, fast_config(max_attempts=2)).deploy("x.com", tmp_path)

        assert [(o.file, o.success) for o in summary.details] == [
            ("a.txt", True),
            (bad_name, False),
            ("c.txt", True),
        ]
        assert summary.total_files == 3
        assert "Upload file failed" in (summary.failures[0].error or "")
        assert len(httpx_mock.get_requests(url=UPLOAD_URL)) == 2
