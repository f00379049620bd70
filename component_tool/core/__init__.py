"""Core functionality for component-tool"""

from .name_resolver import parse_component_identifier, parse_package_name
from .component_lookup import ComponentLookup
from .application_context import (
    ApplicationContext,
    ApplicationContextHolder,
    find_app_root,
    load_application,
    load_manifest,
)
from .dynamic_linking import DynamicLinkGraphBuilder
from .build_system import BuildSystem
from .ifs_archive import IfsArchiveBuilder
from .diagnostics import DiagnosticResult, diagnose
from .scaffold import add_component_by_template

__all__ = [
    'parse_component_identifier',
    'parse_package_name',
    'ComponentLookup',
    'ApplicationContext',
    'ApplicationContextHolder',
    'find_app_root',
    'load_application',
    'load_manifest',
    'DynamicLinkGraphBuilder',
    'BuildSystem',
    'IfsArchiveBuilder',
    'DiagnosticResult',
    'diagnose',
    'add_component_by_template',
]
