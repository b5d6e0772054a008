"""Source file collection from app package archives"""

import logging
import posixpath
from typing import Dict

from appingest.core.packages.archive import PackageArchive
from appingest.core.packages.exceptions import MissingEntryPointError
from appingest.core.packages.models import PackageManifest, SourceFile

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """Resolve './', '..' and duplicate separators in an archive path"""
    return posixpath.normpath(path.replace("\\", "/"))


def encode_path(path: str) -> str:
    """Storage-safe key for a normalized source path ('.' becomes '$')"""
    return normalize_path(path).replace(".", "$")


class SourceCollector:
    """Collects source files and enforces the declared entry point"""

    def __init__(self, extension: str = ".ts"):
        self.extension = extension

    def collect(self, archive: PackageArchive, manifest: PackageManifest) -> Dict[str, SourceFile]:
        """
        Collect source files keyed by normalized path

        Entries whose normalized path starts with '.' are hidden and skipped.

        Args:
            archive: Opened package archive
            manifest: Validated manifest

        Returns:
            Mapping of normalized path to SourceFile

        Raises:
            MissingEntryPointError: If the manifest classFile was not collected
        """
        sources: Dict[str, SourceFile] = {}

        for entry in archive.files():
            if not entry.path.endswith(self.extension):
                continue

            norm = normalize_path(entry.path)
            if norm.startswith("."):
                logger.debug(f"Skipping hidden source file: {entry.path}")
                continue

            sources[norm] = SourceFile(name=norm, content=entry.text(errors="replace"), version=0)

        class_file = normalize_path(manifest.class_file)
        if class_file not in sources:
            raise MissingEntryPointError(
                manifest.class_file,
                package_id=manifest.id,
                package_name=manifest.name,
            )

        logger.info(f"Collected {len(sources)} source files for {manifest.name}")
        return sources
