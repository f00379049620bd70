"""Tests for running component build steps"""

import os
import time

import pytest

from component_tool.api.exceptions import BuildError
from component_tool.core.application_context import ApplicationContext, load_manifest
from component_tool.core.build_system import BuildSystem

from conftest import write_app

MANIFEST = """\
components:
  ns:tool:
    source: tool
    build:
      - command: printf built > ../build/ns_tool.wasm
    clean:
      - target
  ns:lib:
    source: lib
    type: library
  ns:broken:
    source: broken
    build:
      - exit 3
"""


@pytest.fixture
def build_ctx(tmp_path):
    root = write_app(tmp_path, MANIFEST, built=())
    for source in ("tool", "lib", "broken"):
        (root / source).mkdir()
    (root / "tool" / "main.rs").write_text("fn main() {}")
    return ApplicationContext(load_manifest(root), working_dir=root)


@pytest.mark.asyncio
async def test_build_runs_steps_in_source_dir(build_ctx):
    built = await BuildSystem(build_ctx).build(["ns:tool", "ns:lib"])

    assert built == ["ns:tool"]
    assert (build_ctx.root / "build" / "ns_tool.wasm").read_text() == "built"


@pytest.mark.asyncio
async def test_up_to_date_component_is_skipped(build_ctx):
    build_system = BuildSystem(build_ctx)
    await build_system.build(["ns:tool"])

    # Make the artifact clearly newer than the sources
    artifact = build_ctx.root / "build" / "ns_tool.wasm"
    future = time.time() + 60
    os.utime(artifact, (future, future))

    assert build_system.is_up_to_date("ns:tool")
    assert await build_system.build(["ns:tool"]) == []
    assert await build_system.build(["ns:tool"], force_build=True) == ["ns:tool"]


@pytest.mark.asyncio
async def test_failing_step_raises_with_exit_code(build_ctx):
    with pytest.raises(BuildError) as exc_info:
        await BuildSystem(build_ctx).build(["ns:broken"])

    assert "exit code 3" in str(exc_info.value)


def test_dependencies_are_built_first(app_ctx):
    order = BuildSystem(app_ctx).build_order(["ns:orders", "ns:inventory", "ns:assets"])

    assert order.index("ns:inventory") < order.index("ns:orders")


@pytest.mark.asyncio
async def test_clean_removes_outputs(build_ctx):
    target = build_ctx.root / "tool" / "target"
    target.mkdir()
    (target / "obj.o").write_bytes(b"x")
    await BuildSystem(build_ctx).build(["ns:tool"])

    await BuildSystem(build_ctx).clean(["ns:tool"])

    assert not target.exists()
    assert not (build_ctx.root / "build" / "ns_tool.wasm").exists()
