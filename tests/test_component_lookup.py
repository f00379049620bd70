"""Tests for remote component lookup"""

from uuid import uuid4

import pytest

from component_tool.api.exceptions import ComponentVersionNotFoundError, RemoteError
from component_tool.core.component_lookup import ComponentLookup
from component_tool.models import ComponentSelection, ProjectRef, VersionSelection


@pytest.fixture
def lookup(control_plane):
    return ComponentLookup(control_plane, control_plane)


@pytest.mark.asyncio
async def test_by_name_returns_highest_version(control_plane, lookup):
    component_id = control_plane.add_component("orders", versions=3)
    # Store order must not matter
    control_plane.versions[component_id].reverse()

    component = await lookup.resolve(None, ComponentSelection.by_name("orders"))

    assert component.component_id == component_id
    assert component.version == 2


@pytest.mark.asyncio
async def test_by_name_unknown_returns_none(lookup):
    assert await lookup.resolve(None, ComponentSelection.by_name("missing")) is None
    assert await lookup.component_id_by_name(None, "missing") is None


@pytest.mark.asyncio
async def test_by_name_is_scoped_to_project(control_plane, lookup):
    control_plane.add_component("orders", project_id="p1")
    other_id = control_plane.add_component("orders", project_id="p2")

    project = ProjectRef(project_id="p2", project_name="shop")

    assert await lookup.component_id_by_name(project, "orders") == other_id


@pytest.mark.asyncio
async def test_by_id_not_found_returns_none(lookup):
    assert await lookup.resolve(None, ComponentSelection.by_id(uuid4())) is None


@pytest.mark.asyncio
async def test_by_id_propagates_other_remote_errors(control_plane, lookup):
    async def broken(component_id):
        raise RemoteError("boom", 500)

    control_plane.get_latest_component = broken

    with pytest.raises(RemoteError):
        await lookup.resolve(None, ComponentSelection.by_id(uuid4()))


@pytest.mark.asyncio
async def test_explicit_version_is_fetched(control_plane, lookup):
    component_id = control_plane.add_component("orders", versions=3)

    component = await lookup.resolve(
        None, ComponentSelection.by_id(component_id), VersionSelection.by_explicit_version(1)
    )

    assert component.version == 1


@pytest.mark.asyncio
async def test_missing_explicit_version_raises(control_plane, lookup):
    control_plane.add_component("orders", versions=2)

    with pytest.raises(ComponentVersionNotFoundError) as exc_info:
        await lookup.resolve(
            None, ComponentSelection.by_name("orders"), VersionSelection.by_explicit_version(7)
        )

    assert exc_info.value.version == 7


@pytest.mark.asyncio
async def test_worker_name_pins_worker_version(control_plane, lookup):
    component_id = control_plane.add_component("orders", versions=3)
    control_plane.add_worker(component_id, "w1", version=1)

    component = await lookup.resolve(
        None, ComponentSelection.by_name("orders"), VersionSelection.by_worker_name("w1")
    )

    assert component.version == 1


@pytest.mark.asyncio
async def test_unknown_worker_falls_back_to_latest(control_plane, lookup):
    control_plane.add_component("orders", versions=3)

    component = await lookup.resolve(
        None, ComponentSelection.by_name("orders"), VersionSelection.by_worker_name("nope")
    )

    assert component.version == 2
