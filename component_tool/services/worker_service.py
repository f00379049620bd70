"""Worker lifecycle operations after a component changed"""

import logging
from typing import List
from uuid import UUID

from ..api.exceptions import RemoteNotFoundError, WorkerNotFoundError
from ..clients.base import WorkerStore
from ..models.component import Component
from ..models.result import RedeployResult, TryUpdateAllWorkersResult, WorkerUpdateAttempt
from ..models.worker import WorkerMetadata, WorkerUpdateMode
from ..utils.output import highlight, log_action, log_indent, log_warn

logger = logging.getLogger(__name__)


class WorkerService:
    """Update or redeploy the workers of components"""

    def __init__(self, worker_store: WorkerStore):
        self.worker_store = worker_store

    async def worker_metadata(self, component: Component, worker_name: str) -> WorkerMetadata:
        """Get metadata of one worker

        Raises:
            WorkerNotFoundError: If the worker does not exist
        """
        try:
            return await self.worker_store.get_worker_metadata(component.component_id, worker_name)
        except RemoteNotFoundError as e:
            raise WorkerNotFoundError(component.name, worker_name) from e

    async def update_component_workers(self,
                                       component_name: str,
                                       component_id: UUID,
                                       mode: WorkerUpdateMode,
                                       target_version: int) -> TryUpdateAllWorkersResult:
        """
        Trigger an update of every worker on an older component version

        Failures of single workers are collected, they do not stop the
        remaining updates.

        Returns:
            Triggered and failed updates
        """
        result = TryUpdateAllWorkersResult()
        workers = await self.worker_store.list_workers(component_id)

        outdated = [w for w in workers if w.component_version < target_version]
        if not outdated:
            log_action("Skipping", f"worker update for {highlight(component_name)}, no outdated workers")
            return result

        log_action("Updating", f"{len(outdated)} worker(s) of {highlight(component_name)} ({mode})")
        with log_indent():
            for worker in outdated:
                attempt = WorkerUpdateAttempt(
                    component_name=component_name,
                    component_id=component_id,
                    worker_name=worker.worker_name,
                    target_version=target_version,
                )
                try:
                    await self.worker_store.update_worker(
                        component_id, worker.worker_name, mode, target_version
                    )
                    log_action("Triggered", f"update for worker {highlight(worker.worker_name)}")
                    result.triggered.append(attempt)
                except Exception as e:
                    log_warn(f"Failed to trigger update for worker {worker.worker_name}: {e}")
                    attempt.error = str(e)
                    result.failed.append(attempt)

        return result

    async def update_workers_by_components(self,
                                           components: List[Component],
                                           mode: WorkerUpdateMode) -> TryUpdateAllWorkersResult:
        """
        Update the workers of many components

        Every component is attempted; a component whose workers cannot even
        be listed is recorded as a failure and the next one continues.
        """
        result = TryUpdateAllWorkersResult()

        for component in components:
            try:
                component_result = await self.update_component_workers(
                    component.name, component.component_id, mode, component.version
                )
            except Exception as e:
                log_warn(f"Failed to update workers of {component.name}: {e}")
                result.add_component_failure(component, e)
                continue
            result.extend(component_result)

        return result

    async def redeploy_component_workers(self, component_name: str, component_id: UUID) -> RedeployResult:
        """
        Delete and recreate every worker of a component with its original args and env

        Raises:
            RemoteError: On the first failing worker
        """
        result = RedeployResult(component_name=component_name, component_id=component_id)
        workers = await self.worker_store.list_workers(component_id)

        log_action("Redeploying", f"{len(workers)} worker(s) of {highlight(component_name)}")
        with log_indent():
            for worker in workers:
                await self.worker_store.delete_worker(component_id, worker.worker_name)
                await self.worker_store.launch_worker(
                    component_id, worker.worker_name, worker.args, worker.env
                )
                log_action("Redeployed", f"worker {highlight(worker.worker_name)}")
                result.redeployed_workers.append(worker.worker_name)

        return result

    async def redeploy_workers_by_components(self, components: List[Component]) -> List[RedeployResult]:
        """Redeploy the workers of many components, stopping at the first failure"""
        # TODO: collect per-component failures like update_workers_by_components once
        # RedeployResult can carry errors
        results = []
        for component in components:
            results.append(await self.redeploy_component_workers(component.name, component.component_id))
        return results
