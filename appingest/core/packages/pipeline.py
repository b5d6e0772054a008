"""
App Package Ingestion Pipeline

Turns a base64-encoded app archive into an install-ready IngestionResult.

Stages:
1. Decode and open the archive
2. Locate app.json
3. Validate the manifest (identity, host API compatibility)
4. Collect source files and check the entry point
5. Collect localization bundles (concurrently with 3-4)
6. Invoke the external compiler
7. Re-key compiled output by storage-safe path
8. Attach the icon
9. Assemble the result

Any stage failure aborts the ingestion; no partial result is returned.
"""

import asyncio
import copy
import hashlib
import inspect
import logging
from typing import Dict, List, Mapping, Optional, Tuple, Union

from appingest.core.config import IngestionSettings, get_config
from appingest.core.packages.archive import ArchiveEntry, PackageArchive, decode_archive, open_archive
from appingest.core.packages.compiler import AppCompiler
from appingest.core.packages.exceptions import CompilationError, MissingManifestError
from appingest.core.packages.i18n import LocalizationCollector
from appingest.core.packages.icon import IconExtractor
from appingest.core.packages.models import (
    DiagnosticStage,
    IngestionDiagnostic,
    IngestionResult,
    PackageManifest,
    SourceFile,
)
from appingest.core.packages.sources import SourceCollector, encode_path
from appingest.core.packages.validator import ManifestValidator
from appingest.core.packages.version import HostVersionProvider, SettingsVersionProvider

logger = logging.getLogger(__name__)


class PackageIngestionPipeline:
    """Orchestrates validation, collection and compilation of an app package"""

    def __init__(
        self,
        compiler: AppCompiler,
        host_api_version: Optional[Union[str, HostVersionProvider]] = None,
        *,
        settings: Optional[IngestionSettings] = None,
        validator: Optional[ManifestValidator] = None,
        source_collector: Optional[SourceCollector] = None,
        localization_collector: Optional[LocalizationCollector] = None,
        icon_extractor: Optional[IconExtractor] = None,
    ):
        """
        Initialize pipeline

        Args:
            compiler: Compiler capability invoked once per ingestion
            host_api_version: Host API version or provider; defaults to settings
            settings: Ingestion settings; defaults to the global config
        """
        self.settings = settings or get_config()
        self.compiler = compiler

        if host_api_version is None:
            host_api_version = SettingsVersionProvider(self.settings)

        self.validator = validator or ManifestValidator(
            host_api_version,
            max_manifest_bytes=self.settings.max_manifest_bytes,
        )
        self.source_collector = source_collector or SourceCollector(self.settings.source_extension)
        self.localization_collector = localization_collector or LocalizationCollector(
            self.settings.i18n_directory
        )
        self.icon_extractor = icon_extractor or IconExtractor(self.settings.allowed_icon_extensions)

    async def ingest(self, zip_base64: str) -> IngestionResult:
        """
        Ingest a base64-encoded app package

        Raises:
            ArchiveOpenError, MissingManifestError, ManifestParseError,
            IncompatibleVersionError, MissingEntryPointError, InvalidIconError,
            or whatever the compiler raises
        """
        return await self.ingest_bytes(decode_archive(zip_base64))

    async def ingest_bytes(self, data: bytes) -> IngestionResult:
        """Ingest raw archive bytes"""
        sha256 = hashlib.sha256(data).hexdigest()
        archive = open_archive(data, max_size=self.settings.max_archive_bytes)
        manifest_entry = self._locate_manifest(archive)

        logger.info(f"Ingesting app package ({len(archive)} entries, sha256: {sha256[:16]}...)")

        (manifest, diagnostics, sources), bundle = await asyncio.gather(
            asyncio.to_thread(self._validate_and_collect, archive, manifest_entry),
            asyncio.to_thread(self.localization_collector.collect, archive),
        )
        diagnostics.extend(bundle.diagnostics)

        compiled = await self._compile(manifest, sources)
        compiled_files = {encode_path(name): compiled[name].compiled for name in sources}

        icon = self.icon_extractor.extract(
            archive,
            manifest.icon_file,
            package_name=manifest.name,
            package_id=manifest.id,
        )
        if icon:
            manifest = manifest.model_copy(update={"icon_file_content": icon})
        elif manifest.icon_file:
            diagnostics.append(
                IngestionDiagnostic(
                    stage=DiagnosticStage.ICON,
                    path=manifest.icon_file,
                    message="Declared icon was not embedded (missing or unsupported extension)",
                )
            )

        logger.info(
            f"App package ingested: {manifest.name} ({manifest.id}), "
            f"{len(compiled_files)} files, {len(bundle.languages)} languages"
        )

        return IngestionResult(
            manifest=manifest,
            compiled_files=compiled_files,
            language_content=copy.deepcopy(bundle.languages),
            diagnostics=tuple(diagnostics),
            sha256=sha256,
        )

    def _locate_manifest(self, archive: PackageArchive) -> ArchiveEntry:
        entry = archive.get(self.settings.manifest_name)
        if entry is None or entry.is_directory:
            raise MissingManifestError(
                f'Invalid app package. No "{self.settings.manifest_name}" file.'
            )
        return entry

    def _validate_and_collect(
        self,
        archive: PackageArchive,
        manifest_entry: ArchiveEntry,
    ) -> Tuple[PackageManifest, List[IngestionDiagnostic], Dict[str, SourceFile]]:
        manifest, diagnostics = self.validator.validate(manifest_entry.content)
        sources = self.source_collector.collect(archive, manifest)
        return manifest, diagnostics, sources

    async def _compile(
        self,
        manifest: PackageManifest,
        sources: Dict[str, SourceFile],
    ) -> Mapping[str, SourceFile]:
        logger.info(f"Compiling {len(sources)} source files for {manifest.name}")

        result = self.compiler.compile(manifest, dict(sources))
        if inspect.isawaitable(result):
            result = await result

        incomplete = [
            name for name in sources
            if name not in result or result[name].compiled is None
        ]
        if incomplete:
            raise CompilationError(
                f"Compiler returned no output for: {', '.join(incomplete)}",
                package_id=manifest.id,
                package_name=manifest.name,
            )

        return result
