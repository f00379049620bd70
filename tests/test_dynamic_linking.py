"""Tests for dynamic linking map construction"""

import pytest

from component_tool.api.exceptions import BuildError, DependencyNotBuiltError
from component_tool.core.application_context import ApplicationContext, load_manifest
from component_tool.core.dynamic_linking import DynamicLinkGraphBuilder
from component_tool.models import ComponentType
from component_tool.services.deploy_service import component_deploy_properties

from conftest import write_app


def test_dynamic_dependency_becomes_stub_link(app_ctx):
    linking = DynamicLinkGraphBuilder(app_ctx).build("ns:orders")

    assert list(linking.links) == ["ns:inventory-stub/stub-inventory"]
    targets = linking.links["ns:inventory-stub/stub-inventory"].targets
    assert set(targets) == {"inventory", "reservation"}
    assert targets["inventory"].interface_name == "ns:inventory-exports/api"
    assert targets["inventory"].component_name == "ns:inventory"
    assert targets["inventory"].component_type == ComponentType.EPHEMERAL


def test_linking_map_serializes_for_upload(app_ctx):
    data = DynamicLinkGraphBuilder(app_ctx).build("ns:orders").to_dict()

    link = data["dynamicLinking"]["ns:inventory-stub/stub-inventory"]
    assert link["type"] == "WasmRpc"
    assert link["targets"]["reservation"] == {
        "interfaceName": "ns:inventory-exports/reservations",
        "componentName": "ns:inventory",
        "componentType": "Ephemeral",
    }


def test_no_dynamic_dependencies_gives_none(app_ctx):
    assert DynamicLinkGraphBuilder(app_ctx).build("ns:inventory") is None


def test_unbuilt_dependency_raises(tmp_path):
    root = write_app(tmp_path, built=("ns:orders",))
    app_ctx = ApplicationContext(load_manifest(root), working_dir=root)

    with pytest.raises(DependencyNotBuiltError) as exc_info:
        DynamicLinkGraphBuilder(app_ctx).build("ns:orders")

    assert isinstance(exc_info.value, BuildError)
    assert exc_info.value.component_name == "ns:orders"
    assert exc_info.value.dependency_name == "ns:inventory"


PROFILED_MANIFEST = """\
default_build_profile: debug
components:
  ns:orders:
    source: orders
    dependencies:
      - name: ns:inventory
        type: dynamic-wasm-rpc
  ns:inventory:
    source: inventory
    exports:
      inventory: ns:inventory-exports/api
    profiles:
      release:
        type: ephemeral
        linked_wasm: build/release/ns_inventory.wasm
"""


def test_dependencies_follow_build_profile(tmp_path):
    root = write_app(tmp_path, PROFILED_MANIFEST, built=("ns:orders",))
    (root / "build" / "release").mkdir()
    (root / "build" / "release" / "ns_inventory.wasm").write_bytes(b"\0asm")
    app_ctx = ApplicationContext(load_manifest(root), working_dir=root)

    with pytest.raises(DependencyNotBuiltError):
        DynamicLinkGraphBuilder(app_ctx).build("ns:orders")

    properties = component_deploy_properties(app_ctx, "ns:orders", "release")

    target = properties.dynamic_linking.links["ns:inventory-stub/stub-inventory"].targets["inventory"]
    assert target.component_type == ComponentType.EPHEMERAL
