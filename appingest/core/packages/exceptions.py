"""Exception classes for the app package ingestion pipeline"""

from typing import Any, Mapping, Optional


class PackageError(Exception):
    """Base exception for all package ingestion errors

    Carries the declared package identity when it is known so callers can
    present an actionable message.
    """

    def __init__(
        self,
        message: str,
        package_id: Optional[str] = None,
        package_name: Optional[str] = None,
    ):
        super().__init__(message)
        self.package_id = package_id
        self.package_name = package_name


class ConfigurationError(PackageError):
    """Raised when the pipeline is constructed with invalid settings"""
    pass


class ArchiveOpenError(PackageError):
    """Raised when the archive bytes cannot be decoded or opened"""
    pass


class MissingManifestError(PackageError):
    """Raised when the archive has no manifest entry at its root"""
    pass


class ManifestParseError(PackageError):
    """Raised when the manifest is not valid JSON or misses required fields"""
    pass


class IncompatibleVersionError(PackageError):
    """Raised when the host API version does not satisfy requiredApiVersion"""

    def __init__(self, manifest: Mapping[str, Any], host_version: str):
        self.manifest = dict(manifest)
        self.host_version = host_version
        self.required_version = self.manifest.get("requiredApiVersion")
        name = self.manifest.get("name")
        super().__init__(
            f"App '{name}' requires API version {self.required_version!r} "
            f"but the host provides {host_version}",
            package_id=self.manifest.get("id"),
            package_name=name,
        )


class MissingEntryPointError(PackageError):
    """Raised when the manifest's classFile is not among the collected sources"""

    def __init__(
        self,
        class_file: str,
        package_id: Optional[str] = None,
        package_name: Optional[str] = None,
    ):
        self.class_file = class_file
        super().__init__(
            f"Invalid app package '{package_name}'. "
            f"Could not find the classFile ({class_file}) file.",
            package_id=package_id,
            package_name=package_name,
        )


class InvalidIconError(PackageError):
    """Raised when the declared icon path points at a directory"""

    def __init__(
        self,
        icon_file: str,
        package_id: Optional[str] = None,
        package_name: Optional[str] = None,
    ):
        self.icon_file = icon_file
        super().__init__(
            f"Invalid app package '{package_name}'. "
            f"The iconFile ({icon_file}) is a directory.",
            package_id=package_id,
            package_name=package_name,
        )


class CompilationError(PackageError):
    """Base error for compiler implementations

    The pipeline forwards compiler errors unchanged; it raises this type
    itself only when a compiler returns an incomplete result.
    """
    pass
