"""Dynamic linking map construction from declared WASM-RPC dependencies"""

from typing import Optional

from .application_context import ApplicationContext
from ..constants import DependencyType
from ..models.component import ComponentType
from ..models.deploy import DynamicLinkedWasmRpc, DynamicLinkingMap, WasmRpcTarget


class DynamicLinkGraphBuilder:
    """Build the dynamic linking map of a component

    Only dynamic WASM-RPC dependencies take part; static RPC and plain
    WASM dependencies are linked at build time. The map is computed from
    the application context on every call.
    """

    def __init__(self, app_ctx: ApplicationContext):
        self.app_ctx = app_ctx

    def build(self, component_name: str, build_profile: Optional[str] = None) -> Optional[DynamicLinkingMap]:
        """
        Build the dynamic linking map of a component

        Args:
            component_name: Component being deployed
            build_profile: Build profile of the dependencies, the context's profile by default

        Returns:
            Linking map keyed by stub interface name, None without dynamic dependencies

        Raises:
            DependencyNotBuiltError: If a dependency has no linked artifact yet
        """
        links = {}

        for dependency in self.app_ctx.component_dependencies(component_name):
            if dependency.dep_type != DependencyType.DYNAMIC_WASM_RPC:
                continue

            stubs = self.app_ctx.component_stub_interfaces(
                dependency.name, dependent=component_name, build_profile=build_profile
            )
            component_type = ComponentType.EPHEMERAL if stubs.is_ephemeral else ComponentType.DURABLE

            link = links.setdefault(stubs.stub_interface_name, DynamicLinkedWasmRpc())
            for resource_name, interface_name in stubs.exported_interfaces_per_stub_resource.items():
                link.targets[resource_name] = WasmRpcTarget(
                    interface_name=interface_name,
                    component_name=stubs.component_name,
                    component_type=component_type,
                )

        if not links:
            return None
        return DynamicLinkingMap(links=links)
