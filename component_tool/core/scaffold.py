"""Adding new components to an application"""

import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml

from .name_resolver import parse_package_name
from ..api.exceptions import ComponentExistsError, ManifestError
from ..constants import APP_MANIFEST_FILE, DEFAULT_BUILD_DIR, LINKED_WASM_PATTERN
from ..templates import ComponentTemplate

logger = logging.getLogger(__name__)


def _read_raw_manifest(manifest_path: Path) -> Dict[str, Any]:
    with open(manifest_path, 'r') as f:
        content = f.read()

    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid YAML in {manifest_path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"Invalid manifest format in {manifest_path}")
    return data


def add_component_by_template(app_root: Path,
                              template: ComponentTemplate,
                              package_name: str) -> Path:
    """
    Write the sources of a new component and declare it in the manifest

    The component lives in `components-<language>/<namespace>-<name>` and
    its build steps write the linked artifact to the default location.

    Args:
        app_root: Application root
        template: Template to instantiate
        package_name: `namespace:name` of the new component

    Returns:
        Source directory of the new component

    Raises:
        InvalidPackageNameError: If the package name is malformed
        ComponentExistsError: If the manifest or the source directory already has it
        ManifestError: If the manifest cannot be parsed
    """
    namespace, name = parse_package_name(package_name)
    manifest_path = app_root / APP_MANIFEST_FILE
    data = _read_raw_manifest(manifest_path)

    components = data.get("components") or {}
    if package_name in components:
        raise ComponentExistsError(package_name)

    source = f"components-{template.language}/{namespace}-{name}"
    source_dir = app_root / source
    if source_dir.exists() and any(source_dir.iterdir()):
        raise ComponentExistsError(package_name)

    linked_wasm = app_root / LINKED_WASM_PATTERN.format(
        build_dir=DEFAULT_BUILD_DIR,
        component=package_name.replace(":", "_"),
    )
    values = {
        "package": package_name,
        "namespace": namespace,
        "name": name,
        "crate": f"{namespace}_{name}".replace("-", "_"),
        "linked_wasm": Path(os.path.relpath(linked_wasm, source_dir)).as_posix(),
    }

    for relative_path, content in template.files.items():
        target = source_dir / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(template.render(content, values))
        logger.debug("Created %s", target)

    entry: Dict[str, Any] = {
        "source": source,
        "build": [template.render(command, values) for command in template.build],
    }
    if template.clean:
        entry["clean"] = list(template.clean)

    components[package_name] = entry
    data["components"] = components

    with open(manifest_path, 'w') as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

    return source_dir
