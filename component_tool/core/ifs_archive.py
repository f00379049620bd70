"""Initial file system archive builder"""

import logging
import zipfile
from pathlib import Path, PurePosixPath
from typing import List, Optional, Tuple

import httpx

from ..api.exceptions import BuildError
from ..constants import DEFAULT_BUILD_DIR, DEFAULT_TIMEOUT, IFS_ARCHIVE_NAME
from ..models.deploy import IfsArchive, IfsFileProperties, InitialComponentFile
from ..utils.file_utils import ensure_directory, read_file_bytes
from ..utils.output import log_action

logger = logging.getLogger(__name__)


class IfsArchiveBuilder:
    """Pack the initial files of a component into one zip archive

    Local sources are resolved against the application root, directories
    are added recursively below their target, http(s) sources are
    downloaded.
    """

    def __init__(self,
                 app_root: Path,
                 build_dir: Optional[Path] = None,
                 transport: httpx.AsyncBaseTransport = None):
        """
        Initialize archive builder

        Args:
            app_root: Application root for relative sources
            build_dir: Directory receiving the archives
            transport: Custom httpx transport (tests)
        """
        self.app_root = Path(app_root)
        self.build_dir = Path(build_dir) if build_dir else self.app_root / DEFAULT_BUILD_DIR
        self._transport = transport

    async def build_files_archive(self,
                                  component_name: str,
                                  files: List[InitialComponentFile]) -> IfsArchive:
        """
        Build the initial files archive of a component

        Args:
            component_name: Component the files belong to
            files: Declared initial files

        Returns:
            Archive path and per-file properties

        Raises:
            BuildError: If a source is missing, cannot be downloaded, or two
                files share a target path
        """
        ensure_directory(self.build_dir)
        archive_path = self.build_dir / IFS_ARCHIVE_NAME.format(
            component=component_name.replace(":", "_")
        )

        log_action("Packing", f"{len(files)} initial file(s) into {archive_path}")

        entries: List[Tuple[str, bytes]] = []
        properties: List[IfsFileProperties] = []
        targets = set()

        async with httpx.AsyncClient(timeout=DEFAULT_TIMEOUT, transport=self._transport) as client:
            for file in files:
                for target, content in await self._collect(client, file):
                    if target in targets:
                        raise BuildError(
                            f"Initial file target {target} of component {component_name} is declared twice"
                        )
                    targets.add(target)
                    entries.append((target, content))
                    properties.append(IfsFileProperties(path=target, permissions=file.permissions))

        with zipfile.ZipFile(archive_path, 'w', compression=zipfile.ZIP_DEFLATED) as archive:
            for target, content in entries:
                archive.writestr(target.lstrip("/"), content)

        logger.debug("Created archive %s with %d entries", archive_path, len(entries))
        return IfsArchive(archive_path=archive_path, properties=properties)

    async def _collect(self, client: httpx.AsyncClient,
                       file: InitialComponentFile) -> List[Tuple[str, bytes]]:
        target = _normalize_target(file.target)

        if file.is_remote:
            return [(target, await self._download(client, file.source))]

        source = Path(file.source)
        if not source.is_absolute():
            source = self.app_root / source

        if source.is_file():
            return [(target, await read_file_bytes(source))]

        if source.is_dir():
            collected = []
            for path in sorted(p for p in source.rglob("*") if p.is_file()):
                relative = path.relative_to(source).as_posix()
                collected.append((str(PurePosixPath(target) / relative), await read_file_bytes(path)))
            return collected

        raise BuildError(f"Initial file source not found: {file.source}")

    async def _download(self, client: httpx.AsyncClient, url: str) -> bytes:
        logger.debug("Downloading initial file %s", url)
        try:
            response = await client.get(url, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise BuildError(f"Failed to download initial file {url}: {e}") from e
        return response.content


def _normalize_target(target: str) -> str:
    if not target.startswith("/"):
        target = "/" + target
    return target
