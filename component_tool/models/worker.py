"""Worker data models"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID


class WorkerUpdateMode(Enum):
    """Worker update modes"""
    AUTOMATIC = "auto"
    MANUAL = "manual"

    @property
    def api_value(self) -> str:
        return "Automatic" if self == WorkerUpdateMode.AUTOMATIC else "Manual"

    def __str__(self) -> str:
        return self.value


@dataclass
class WorkerMetadata:
    """Metadata of a running worker"""

    worker_name: str
    component_id: UUID
    component_version: int
    args: List[str] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=dict)
    status: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WorkerMetadata':
        """Create from the control plane's worker metadata payload"""
        worker_id = data["workerId"]
        return cls(
            worker_name=worker_id["workerName"],
            component_id=UUID(worker_id["componentId"]),
            component_version=int(data.get("componentVersion", 0)),
            args=list(data.get("args") or []),
            env=dict(data.get("env") or {}),
            status=data.get("status"),
        )
