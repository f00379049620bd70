"""Tests for the initial files archive"""

import zipfile

import httpx
import pytest

from component_tool.api.exceptions import BuildError
from component_tool.core.ifs_archive import IfsArchiveBuilder
from component_tool.models import FilePermissions, InitialComponentFile


@pytest.mark.asyncio
async def test_local_files_and_directories(tmp_path):
    (tmp_path / "static" / "css").mkdir(parents=True)
    (tmp_path / "static" / "index.html").write_text("<html/>")
    (tmp_path / "static" / "css" / "site.css").write_text("body {}")
    (tmp_path / "motd.txt").write_text("hello")

    archive = await IfsArchiveBuilder(tmp_path).build_files_archive("ns:web", [
        InitialComponentFile("motd.txt", "/etc/motd"),
        InitialComponentFile("static", "/srv", FilePermissions.READ_WRITE),
    ])

    assert archive.archive_path == tmp_path / "build" / "ns_web-files.zip"
    assert [(p.path, p.permissions) for p in archive.properties] == [
        ("/etc/motd", FilePermissions.READ_ONLY),
        ("/srv/css/site.css", FilePermissions.READ_WRITE),
        ("/srv/index.html", FilePermissions.READ_WRITE),
    ]
    with zipfile.ZipFile(archive.archive_path) as zf:
        assert sorted(zf.namelist()) == ["etc/motd", "srv/css/site.css", "srv/index.html"]
        assert zf.read("etc/motd") == b"hello"


@pytest.mark.asyncio
async def test_remote_files_are_downloaded(tmp_path):
    def handler(request):
        assert request.url == "https://files.test/data.bin"
        return httpx.Response(200, content=b"remote-bytes")

    builder = IfsArchiveBuilder(tmp_path, transport=httpx.MockTransport(handler))
    archive = await builder.build_files_archive("app", [
        InitialComponentFile("https://files.test/data.bin", "data.bin"),
    ])

    assert archive.properties_dict() == {"values": [{"path": "/data.bin", "permissions": "read-only"}]}
    with zipfile.ZipFile(archive.archive_path) as zf:
        assert zf.read("data.bin") == b"remote-bytes"


@pytest.mark.asyncio
async def test_failed_download_raises_build_error(tmp_path):
    builder = IfsArchiveBuilder(tmp_path, transport=httpx.MockTransport(lambda r: httpx.Response(404)))

    with pytest.raises(BuildError):
        await builder.build_files_archive("app", [InitialComponentFile("https://files.test/x", "/x")])


@pytest.mark.asyncio
async def test_missing_local_source_raises_build_error(tmp_path):
    with pytest.raises(BuildError):
        await IfsArchiveBuilder(tmp_path).build_files_archive("app", [InitialComponentFile("nope", "/nope")])


@pytest.mark.asyncio
async def test_duplicate_target_raises_build_error(tmp_path):
    (tmp_path / "conf").mkdir()
    (tmp_path / "conf" / "app.toml").write_text("a = 1")
    (tmp_path / "app.toml").write_text("a = 2")

    with pytest.raises(BuildError) as exc_info:
        await IfsArchiveBuilder(tmp_path).build_files_archive("app", [
            InitialComponentFile("conf", "/etc"),
            InitialComponentFile("app.toml", "etc/app.toml"),
        ])

    assert "/etc/app.toml" in str(exc_info.value)
    assert not (tmp_path / "build" / "app-files.zip").exists()
