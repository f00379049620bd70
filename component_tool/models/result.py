"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID

from .component import Component


class OperationStatus(Enum):
    """Operation status"""
    SUCCESS = "success"
    FAILED = "failed"
    PARTIAL = "partial"
    SKIPPED = "skipped"
    IN_PROGRESS = "in_progress"


@dataclass
class Result:
    """Base result class"""

    status: OperationStatus
    message: str = ""
    warnings: List[str] = field(default_factory=list)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    @property
    def is_success(self) -> bool:
        """Check if operation was successful"""
        return self.status == OperationStatus.SUCCESS

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def add_warning(self, message: str) -> None:
        """Add a warning"""
        self.warnings.append(message)

    def complete(self, status: Optional[OperationStatus] = None) -> None:
        """Mark operation as complete"""
        self.end_time = datetime.now()
        if status:
            self.status = status


@dataclass
class WorkerUpdateAttempt:
    """Outcome of triggering an update for one worker"""

    component_name: str
    component_id: UUID
    worker_name: Optional[str]
    target_version: int
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "component_name": self.component_name,
            "component_id": str(self.component_id),
            "worker_name": self.worker_name,
            "target_version": self.target_version,
        }
        if self.error:
            data["error"] = self.error
        return data


@dataclass
class TryUpdateAllWorkersResult:
    """Aggregated worker update outcomes over many components"""

    triggered: List[WorkerUpdateAttempt] = field(default_factory=list)
    failed: List[WorkerUpdateAttempt] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)

    def extend(self, other: 'TryUpdateAllWorkersResult') -> None:
        """Fold another result into this one"""
        self.triggered.extend(other.triggered)
        self.failed.extend(other.failed)

    def add_component_failure(self, component: Component, error: Exception) -> None:
        """Record a failure that prevented updating any worker of a component"""
        self.failed.append(WorkerUpdateAttempt(
            component_name=component.name,
            component_id=component.component_id,
            worker_name=None,
            target_version=component.version,
            error=str(error),
        ))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "triggered": [a.to_dict() for a in self.triggered],
            "failed": [a.to_dict() for a in self.failed],
        }


@dataclass
class RedeployResult:
    """Workers redeployed for one component"""

    component_name: str
    component_id: UUID
    redeployed_workers: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component_name": self.component_name,
            "component_id": str(self.component_id),
            "redeployed_workers": self.redeployed_workers,
        }


@dataclass
class DeployResult(Result):
    """Result of deploy operation"""

    components: List[Component] = field(default_factory=list)
    created: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    update_results: Optional[TryUpdateAllWorkersResult] = None
    redeploy_results: List[RedeployResult] = field(default_factory=list)

    def add_component(self, component: Component, created: bool) -> None:
        """Record a deployed component"""
        self.components.append(component)
        if created:
            self.created.append(component.name)
        else:
            self.updated.append(component.name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "status": self.status.value,
            "message": self.message,
            "components": [c.to_dict() for c in self.components],
            "created": self.created,
            "updated": self.updated,
            "skipped": self.skipped,
            "update_results": self.update_results.to_dict() if self.update_results else None,
            "redeploy_results": [r.to_dict() for r in self.redeploy_results],
            "warnings": self.warnings,
            "duration": self.duration,
        }
