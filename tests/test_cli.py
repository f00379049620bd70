"""Tests for the component command group"""

import pytest
from click.testing import CliRunner

from component_tool.cli.main import Context, cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, tmp_path, control_plane, monkeypatch):
    monkeypatch.setattr(Context, "create_client", lambda self: control_plane)
    config = str(tmp_path / "no-config.yaml")

    def _invoke(*args, **kwargs):
        return runner.invoke(cli, ["--config", config, *args], **kwargs)

    return _invoke


def test_get_with_missing_segment_fails(invoke, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = invoke("component", "get", "shop/")

    assert result.exit_code == 1
    assert "Missing component part in component name!" in result.output
    assert "<project>/<component>" in result.output


def test_get_with_too_many_segments_fails(invoke, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = invoke("component", "get", "a/b/c/d")

    assert result.exit_code == 1
    assert "Failed to parse component name: a/b/c/d" in result.output


def test_get_missing_version_lists_available(invoke, control_plane, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    control_plane.add_component("orders", versions=2)

    result = invoke("component", "get", "orders", "--version", "5")

    assert result.exit_code == 1
    assert "Available component versions:" in result.output


def test_deploy_creates_component(invoke, control_plane, app_root, monkeypatch):
    monkeypatch.chdir(app_root)

    result = invoke("component", "deploy", "ns:orders")

    assert result.exit_code == 0, result.output
    assert "Created:" in result.output
    assert [u["name"] for u in control_plane.uploads] == ["ns:orders"]


def test_deploy_outside_application_fails(invoke, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = invoke("component", "deploy")

    assert result.exit_code == 1
    assert "No application found" in result.output


def test_list_shows_versions(invoke, control_plane, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    control_plane.add_component("orders", versions=2)

    result = invoke("component", "list", "orders")

    assert result.exit_code == 0, result.output
    assert "orders" in result.output


def test_update_workers_exits_non_zero_on_failure(invoke, control_plane, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    component_id = control_plane.add_component("orders", versions=2)
    control_plane.add_worker(component_id, "w1", version=0)
    control_plane.failing_workers.add("w1")

    result = invoke("component", "update-workers", "orders", "--update-mode", "manual")

    assert result.exit_code == 1


def test_redeploy_workers_requires_confirmation(invoke, control_plane, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    component_id = control_plane.add_component("orders")
    control_plane.add_worker(component_id, "w1", version=0)

    refused = invoke("component", "redeploy-workers", "orders", input="n\n")
    assert refused.exit_code == 1
    assert control_plane.calls == []

    accepted = invoke("-y", "component", "redeploy-workers", "orders")
    assert accepted.exit_code == 0, accepted.output
    assert ("delete", component_id, "w1") in control_plane.calls


def test_build_does_not_need_connection_profile(invoke, app_root, monkeypatch):
    monkeypatch.chdir(app_root)

    def _no_client(self):
        raise AssertionError("build must not create a client")

    monkeypatch.setattr(Context, "create_client", _no_client)

    built = invoke("--profile", "missing", "component", "build", "ns:orders")
    assert built.exit_code == 0, built.output

    cleaned = invoke("--profile", "missing", "component", "clean", "ns:orders")
    assert cleaned.exit_code == 0, cleaned.output


def test_new_adds_component(invoke, app_root, monkeypatch):
    monkeypatch.chdir(app_root)

    result = invoke("component", "new", "python", "ns:report")

    assert result.exit_code == 0, result.output
    assert "ns:report" in result.output
    assert (app_root / "components-python" / "ns-report" / "main.py").exists()


def test_new_refuses_existing_component(invoke, app_root, monkeypatch):
    monkeypatch.chdir(app_root)

    result = invoke("component", "new", "rust", "ns:orders")

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_templates_filters_by_language(invoke):
    result = invoke("component", "templates", "python")

    assert result.exit_code == 0, result.output
    assert "python" in result.output
    assert "rust" not in result.output


def test_diagnose_exit_code_follows_checks(invoke, app_root, monkeypatch):
    monkeypatch.chdir(app_root)

    healthy = invoke("component", "diagnose", "ns:orders")
    assert healthy.exit_code == 0, healthy.output
    assert "All checks passed!" in healthy.output

    # ns:shared has no linked artifact
    unhealthy = invoke("component", "diagnose")
    assert unhealthy.exit_code == 1
    assert "check(s) failed" in unhealthy.output
