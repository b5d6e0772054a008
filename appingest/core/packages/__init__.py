"""App Package Ingestion

Turns third-party app packages (zip archives) into install-ready bundles.

Core principles:
1. Ingestion never executes app code
2. Every failure is terminal; no partial result is returned
3. Localization is best-effort; skipped files are reported as diagnostics
4. The host API version is injected, never discovered

Components:
- archive: In-memory zip reader
- validator: Manifest parsing, identity and host compatibility
- sources: Source file collection and entry-point check
- i18n: Localization bundle assembly
- icon: Icon extraction
- compiler: Compiler capability protocol
- version: Host API version providers
- pipeline: Orchestration
- models: Pydantic data models
- exceptions: Custom exceptions
"""

from appingest.core.packages.exceptions import (
    PackageError,
    ConfigurationError,
    ArchiveOpenError,
    MissingManifestError,
    ManifestParseError,
    IncompatibleVersionError,
    MissingEntryPointError,
    InvalidIconError,
    CompilationError,
)
from appingest.core.packages.models import (
    PackageManifest,
    SourceFile,
    LocalizationBundle,
    IngestionDiagnostic,
    IngestionResult,
    DiagnosticStage,
)
from appingest.core.packages.archive import ArchiveEntry, PackageArchive, decode_archive, open_archive
from appingest.core.packages.validator import ManifestValidator
from appingest.core.packages.sources import SourceCollector, encode_path, normalize_path
from appingest.core.packages.i18n import LocalizationCollector
from appingest.core.packages.icon import IconExtractor
from appingest.core.packages.compiler import AppCompiler
from appingest.core.packages.version import (
    HostVersionProvider,
    StaticVersionProvider,
    SettingsVersionProvider,
    resolve_host_version,
)
from appingest.core.packages.pipeline import PackageIngestionPipeline

__all__ = [
    # Exceptions
    "PackageError",
    "ConfigurationError",
    "ArchiveOpenError",
    "MissingManifestError",
    "ManifestParseError",
    "IncompatibleVersionError",
    "MissingEntryPointError",
    "InvalidIconError",
    "CompilationError",
    # Models
    "PackageManifest",
    "SourceFile",
    "LocalizationBundle",
    "IngestionDiagnostic",
    "IngestionResult",
    "DiagnosticStage",
    # Archive
    "ArchiveEntry",
    "PackageArchive",
    "decode_archive",
    "open_archive",
    # Components
    "ManifestValidator",
    "SourceCollector",
    "LocalizationCollector",
    "IconExtractor",
    "AppCompiler",
    "encode_path",
    "normalize_path",
    # Host version
    "HostVersionProvider",
    "StaticVersionProvider",
    "SettingsVersionProvider",
    "resolve_host_version",
    # Pipeline
    "PackageIngestionPipeline",
]
