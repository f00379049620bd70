"""Shared fixtures: in-memory control plane and a sample application"""

import textwrap
from pathlib import Path
from typing import Dict, List, Optional
from uuid import UUID, uuid4

import pytest

from component_tool.api.exceptions import (
    ProjectNotFoundError,
    RemoteConflictError,
    RemoteError,
    RemoteNotFoundError,
)
from component_tool.clients.base import ControlPlaneClient
from component_tool.constants import APP_MANIFEST_FILE
from component_tool.core.application_context import (
    ApplicationContext,
    ApplicationContextHolder,
    load_manifest,
)
from component_tool.models import Component, ComponentType, ProjectRef, WorkerMetadata
from component_tool.services import DeployService, WorkerService


class FakeControlPlane(ControlPlaneClient):
    """In-memory component and worker store"""

    def __init__(self):
        super().__init__({})
        self.versions: Dict[UUID, List[Component]] = {}
        self.workers: Dict[UUID, Dict[str, WorkerMetadata]] = {}
        self.projects: List[ProjectRef] = []
        self.uploads: List[dict] = []
        self.calls: List[tuple] = []
        self.failing_workers = set()
        self.failing_worker_lists = set()

    # Test helpers

    def add_component(self, name: str, versions: int = 1,
                      component_type: ComponentType = ComponentType.DURABLE,
                      project_id: Optional[str] = None) -> UUID:
        component_id = uuid4()
        self.versions[component_id] = [
            Component(component_id, name, v, component_type, project_id=project_id)
            for v in range(versions)
        ]
        return component_id

    def add_worker(self, component_id: UUID, worker_name: str, version: int,
                   args=None, env=None) -> None:
        self.workers.setdefault(component_id, {})[worker_name] = WorkerMetadata(
            worker_name=worker_name,
            component_id=component_id,
            component_version=version,
            args=list(args or []),
            env=dict(env or {}),
        )

    # ComponentStore

    async def list_components(self, project_id=None, name=None):
        return [
            c
            for versions in self.versions.values()
            for c in versions
            if (name is None or c.name == name) and (project_id is None or c.project_id == project_id)
        ]

    async def get_component(self, component_id, version):
        for component in self.versions.get(component_id, []):
            if component.version == version:
                return component
        raise RemoteNotFoundError(f"Component {component_id}@{version} not found")

    async def get_latest_component(self, component_id):
        if component_id not in self.versions:
            raise RemoteNotFoundError(f"Component {component_id} not found")
        return self.versions[component_id][-1]

    async def create_component(self, name, component_type, component, project_id=None,
                               files=None, files_archive=None, dynamic_linking=None):
        if any(versions[0].name == name for versions in self.versions.values()):
            raise RemoteConflictError(f"Component {name} already exists")
        self.uploads.append({
            "op": "create", "name": name, "component": component, "files": files,
            "files_archive": files_archive, "dynamic_linking": dynamic_linking,
        })
        created = Component(uuid4(), name, 0, component_type, project_id=project_id)
        self.versions[created.component_id] = [created]
        return created

    async def update_component(self, component_id, component_type, component,
                               files=None, files_archive=None, dynamic_linking=None):
        latest = await self.get_latest_component(component_id)
        self.uploads.append({
            "op": "update", "name": latest.name, "component": component, "files": files,
            "files_archive": files_archive, "dynamic_linking": dynamic_linking,
        })
        updated = Component(component_id, latest.name, latest.version + 1, component_type,
                            project_id=latest.project_id)
        self.versions[component_id].append(updated)
        return updated

    async def resolve_project(self, account_id, project_name):
        for project in self.projects:
            if project.project_name == project_name and account_id in (None, project.account_id):
                return project
        raise ProjectNotFoundError(project_name, account_id)

    # WorkerStore

    async def get_worker_metadata(self, component_id, worker_name):
        try:
            return self.workers[component_id][worker_name]
        except KeyError:
            raise RemoteNotFoundError(f"Worker {worker_name} not found") from None

    async def list_workers(self, component_id):
        if component_id in self.failing_worker_lists:
            raise RemoteError("Worker listing failed", 500)
        return list(self.workers.get(component_id, {}).values())

    async def update_worker(self, component_id, worker_name, mode, target_version):
        self.calls.append(("update", component_id, worker_name, mode, target_version))
        if worker_name in self.failing_workers:
            raise RemoteError(f"Update of {worker_name} failed", 500)

    async def delete_worker(self, component_id, worker_name):
        self.calls.append(("delete", component_id, worker_name))
        if worker_name in self.failing_workers:
            raise RemoteError(f"Delete of {worker_name} failed", 500)
        del self.workers[component_id][worker_name]

    async def launch_worker(self, component_id, worker_name, args, env):
        self.calls.append(("launch", component_id, worker_name, list(args), dict(env)))
        latest = self.versions[component_id][-1]
        self.add_worker(component_id, worker_name, latest.version, args, env)


MANIFEST = """\
default_build_profile: debug
components:
  ns:orders:
    source: orders
    dependencies:
      - name: ns:inventory
        type: dynamic-wasm-rpc
      - name: ns:shared
        type: wasm
  ns:inventory:
    source: inventory
    type: ephemeral
    exports:
      inventory: ns:inventory-exports/api
      reservation: ns:inventory-exports/reservations
  ns:shared:
    source: shared
    type: library
  ns:assets:
    source: assets
    files:
      - source: data/config.json
        target: /etc/config.json
        permissions: read-write
    profiles:
      release:
        linked_wasm: build/release/ns_assets.wasm
"""


def write_app(root: Path, manifest: str = MANIFEST, built=("ns:orders", "ns:inventory", "ns:assets")) -> Path:
    """Write a sample application with prebuilt artifacts"""
    root.mkdir(parents=True, exist_ok=True)
    (root / APP_MANIFEST_FILE).write_text(textwrap.dedent(manifest))
    for source in ("orders", "inventory", "shared", "assets"):
        (root / source).mkdir(parents=True, exist_ok=True)
    (root / "data").mkdir(exist_ok=True)
    (root / "data" / "config.json").write_text('{"debug": true}')
    (root / "build").mkdir(exist_ok=True)
    for name in built:
        (root / "build" / f"{name.replace(':', '_')}.wasm").write_bytes(b"\0asm" + name.encode())
    return root


@pytest.fixture
def control_plane():
    return FakeControlPlane()


@pytest.fixture
def app_root(tmp_path):
    return write_app(tmp_path / "app")


@pytest.fixture
def app_ctx(app_root):
    return ApplicationContext(load_manifest(app_root), working_dir=app_root)


@pytest.fixture
def app_holder(app_ctx):
    return ApplicationContextHolder(app_ctx)


@pytest.fixture
def worker_service(control_plane):
    return WorkerService(control_plane)


@pytest.fixture
def deploy_service(control_plane, app_holder, worker_service):
    return DeployService(control_plane, app_holder, worker_service)
