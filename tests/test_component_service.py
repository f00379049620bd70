"""Tests for component selection, queries and auto-deploy"""

import pytest

from component_tool.api.exceptions import (
    ComponentNotFoundError,
    ComponentToolError,
    ComponentVersionNotFoundError,
    MissingSegmentError,
    NoComponentsSelectedError,
    NonSuccessfulExit,
    UserCancelledError,
)
from component_tool.constants import ComponentNameMatchKind
from component_tool.core.application_context import (
    ApplicationContext,
    ApplicationContextHolder,
    load_manifest,
)
from component_tool.models import ProjectRef, WorkerUpdateMode
from component_tool.services import ComponentService


def make_service(control_plane, app_holder, deploy_service, worker_service, **kwargs):
    return ComponentService(control_plane, app_holder, deploy_service, worker_service, **kwargs)


@pytest.fixture
def service(control_plane, app_holder, deploy_service, worker_service):
    return make_service(control_plane, app_holder, deploy_service, worker_service)


@pytest.fixture
def outside_app(control_plane, deploy_service, worker_service):
    return make_service(control_plane, ApplicationContextHolder(None), deploy_service, worker_service)


@pytest.mark.asyncio
async def test_explicit_name_outside_application(outside_app):
    selected = await outside_app.select_components_by_app_or_name("orders")

    assert selected.component_names == ["orders"]
    assert selected.project is None


@pytest.mark.asyncio
async def test_project_segments_are_resolved(control_plane, outside_app):
    control_plane.projects.append(ProjectRef("p1", "shop", "acme"))

    selected = await outside_app.select_components_by_app_or_name("acme/shop/orders")

    assert selected.project.project_id == "p1"
    assert selected.account_id == "acme"


@pytest.mark.asyncio
async def test_default_project_applies_without_segment(control_plane, app_holder, deploy_service, worker_service):
    control_plane.projects.append(ProjectRef("p1", "shop", "acme"))
    service = make_service(control_plane, app_holder, deploy_service, worker_service, default_project="shop")

    selected = await service.select_components_by_app_or_name("orders")

    assert selected.project.project_id == "p1"


@pytest.mark.asyncio
async def test_malformed_name_is_rejected(service):
    with pytest.raises(MissingSegmentError):
        await service.select_components_by_app_or_name("shop/")


@pytest.mark.asyncio
async def test_directory_selection_without_name(service):
    selected = await service.select_components_by_app_or_name(None)

    assert len(selected.component_names) == 4


@pytest.mark.asyncio
async def test_no_selection_raises_unless_allowed(outside_app):
    with pytest.raises(NoComponentsSelectedError):
        await outside_app.select_components_by_app_or_name(None)

    selected = await outside_app.select_components_by_app_or_name(None, allow_no_matches=True)
    assert selected.component_names == []


@pytest.mark.asyncio
async def test_list_without_selection_lists_everything(control_plane, outside_app):
    control_plane.add_component("a", versions=2)
    control_plane.add_component("b")

    components = await outside_app.list_components()

    assert len(components) == 3


@pytest.mark.asyncio
async def test_list_unknown_name_fails(outside_app):
    with pytest.raises(NonSuccessfulExit):
        await outside_app.list_components("missing")


@pytest.mark.asyncio
async def test_get_latest_and_specific_version(control_plane, outside_app):
    control_plane.add_component("orders", versions=3)

    latest = await outside_app.get_components("orders")
    pinned = await outside_app.get_components("orders", version=1)

    assert latest[0].version == 2
    assert pinned[0].version == 1


@pytest.mark.asyncio
async def test_get_missing_version_lists_available(control_plane, outside_app):
    control_plane.add_component("orders", versions=2)

    with pytest.raises(ComponentVersionNotFoundError) as exc_info:
        await outside_app.get_components("orders", version=9)

    assert exc_info.value.available_versions == [0, 1]


@pytest.mark.asyncio
async def test_get_version_with_multiple_selection_fails(service):
    with pytest.raises(ComponentToolError):
        await service.get_components(None, version=1)


@pytest.mark.asyncio
async def test_undeployed_components_are_skipped_for_update(control_plane, service):
    component_id = control_plane.add_component("ns:orders", versions=2)
    control_plane.add_worker(component_id, "w1", version=0)

    components = await service.components_for_update_or_redeploy(None)
    result = await service.update_workers(None, WorkerUpdateMode.AUTOMATIC)

    assert [c.name for c in components] == ["ns:orders"]
    assert [a.worker_name for a in result.triggered] == ["w1"]


@pytest.mark.asyncio
async def test_match_kind(app_root, control_plane, deploy_service, worker_service):
    app_ctx = ApplicationContext(load_manifest(app_root), working_dir=app_root / "orders")
    app_ctx.select_components([])
    service = make_service(control_plane, ApplicationContextHolder(app_ctx), deploy_service, worker_service)

    assert await service.match_component_name("ns:orders") == ComponentNameMatchKind.APP_CURRENT_DIR
    assert await service.match_component_name("ns:inventory") == ComponentNameMatchKind.APP
    assert await service.match_component_name("other") == ComponentNameMatchKind.UNKNOWN


@pytest.mark.asyncio
async def test_auto_deploy_after_confirmation(control_plane, app_holder, deploy_service, worker_service):
    questions = []

    def confirm(message):
        questions.append(message)
        return True

    service = make_service(control_plane, app_holder, deploy_service, worker_service, confirm=confirm)

    component = await service.component_by_name_with_auto_deploy(
        None, ComponentNameMatchKind.APP, "ns:inventory"
    )

    assert component.name == "ns:inventory"
    assert component.version == 0
    assert len(questions) == 1


@pytest.mark.asyncio
async def test_auto_deploy_refused(control_plane, app_holder, deploy_service, worker_service):
    service = make_service(control_plane, app_holder, deploy_service, worker_service,
                           confirm=lambda message: False)

    with pytest.raises(UserCancelledError):
        await service.component_by_name_with_auto_deploy(None, ComponentNameMatchKind.APP, "ns:inventory")
    assert control_plane.uploads == []


@pytest.mark.asyncio
async def test_unknown_component_is_not_deployed(service):
    with pytest.raises(ComponentNotFoundError):
        await service.component_by_name_with_auto_deploy(None, ComponentNameMatchKind.UNKNOWN, "other")


@pytest.mark.asyncio
async def test_existing_component_skips_deploy(control_plane, service):
    control_plane.add_component("ns:orders", versions=2)

    component = await service.component_by_name_with_auto_deploy(
        None, ComponentNameMatchKind.APP, "ns:orders"
    )

    assert component.version == 1
    assert control_plane.uploads == []


@pytest.mark.asyncio
async def test_worker_metadata_resolves_component(control_plane, service):
    component_id = control_plane.add_component("ns:orders", versions=2)
    control_plane.add_worker(component_id, "w1", version=1, env={"A": "1"})

    metadata = await service.worker_metadata("ns:orders", "w1")

    assert metadata.env == {"A": "1"}


@pytest.mark.asyncio
async def test_update_and_redeploy_without_selection_do_nothing(control_plane, outside_app):
    component_id = control_plane.add_component("orders")
    control_plane.add_worker(component_id, "w1", version=0)

    updated = await outside_app.update_workers(None, WorkerUpdateMode.AUTOMATIC)
    redeployed = await outside_app.redeploy_workers(None)

    assert updated.triggered == [] and updated.failed == []
    assert redeployed == []
    assert control_plane.calls == []
