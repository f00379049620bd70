"""CLI utility functions"""

from .interactive import confirm, confirm_or_cancel
from .output import (
    format_component_details,
    format_component_list,
    format_deploy_result,
    format_diagnostics,
    format_redeploy_results,
    format_templates,
    format_update_result,
    format_worker_metadata,
)

__all__ = [
    # Interactive utilities
    'confirm',
    'confirm_or_cancel',

    # Output utilities
    'format_component_details',
    'format_component_list',
    'format_deploy_result',
    'format_diagnostics',
    'format_redeploy_results',
    'format_templates',
    'format_update_result',
    'format_worker_metadata',
]
