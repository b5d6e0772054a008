"""Validator for app package manifests"""

import json
import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple, Union

import semantic_version
from pydantic import ValidationError as PydanticValidationError

from appingest.core.packages.exceptions import IncompatibleVersionError, ManifestParseError
from appingest.core.packages.models import (
    UUID4_PATTERN,
    DiagnosticStage,
    IngestionDiagnostic,
    PackageManifest,
)
from appingest.core.packages.version import HostVersionProvider, resolve_host_version

logger = logging.getLogger(__name__)

# Security limits
MAX_MANIFEST_SIZE = 100 * 1024  # 100KB


class ManifestValidator:
    """Parses app.json and checks identity and host compatibility

    The host API version is injected at construction; validation itself
    performs no I/O.
    """

    def __init__(
        self,
        host_api_version: Union[str, HostVersionProvider],
        max_manifest_bytes: int = MAX_MANIFEST_SIZE,
    ):
        self.host_api_version = resolve_host_version(host_api_version)
        self.max_manifest_bytes = max_manifest_bytes
        self._host_version = semantic_version.Version(self.host_api_version)

    def parse(self, raw: bytes) -> Dict[str, Any]:
        """
        Parse raw manifest bytes into a JSON object

        Raises:
            ManifestParseError: If the manifest is oversized, not JSON, or not an object
        """
        if len(raw) > self.max_manifest_bytes:
            raise ManifestParseError(
                f"Manifest too large: {len(raw) / 1024:.2f}KB "
                f"(max: {self.max_manifest_bytes / 1024}KB)"
            )

        try:
            data = json.loads(raw.decode("utf-8-sig"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ManifestParseError(f"Invalid app package. The manifest is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ManifestParseError(
                f"Invalid app package. The manifest must be a JSON object (received: {type(data).__name__})"
            )

        return data

    @staticmethod
    def ensure_identity(data: Dict[str, Any]) -> Tuple[Dict[str, Any], Optional[IngestionDiagnostic]]:
        """
        Replace a missing or malformed id with a fresh UUIDv4

        Returns:
            Tuple of (manifest_dict, diagnostic or None when the id was kept)
        """
        current = data.get("id")
        if isinstance(current, str) and UUID4_PATTERN.match(current):
            return data, None

        patched = dict(data)
        patched["id"] = str(uuid.uuid4())

        message = (
            f"Generated a uuid v4 id for '{data.get('name')}' since it did not provide a valid one. "
            "This is NOT recommended as the same app can be installed several times."
        )
        logger.warning(message)

        return patched, IngestionDiagnostic(stage=DiagnosticStage.IDENTITY, message=message)

    @staticmethod
    def build_manifest(data: Dict[str, Any]) -> PackageManifest:
        """
        Validate manifest schema using Pydantic

        Raises:
            ManifestParseError: If required fields are missing or mistyped
        """
        try:
            return PackageManifest.model_validate(data)
        except PydanticValidationError as e:
            name = data.get("name")
            raise ManifestParseError(
                f"Invalid manifest schema for '{name}': {e}",
                package_id=data.get("id"),
                package_name=name if isinstance(name, str) else None,
            ) from e

    def check_compatibility(self, manifest: PackageManifest) -> None:
        """
        Check requiredApiVersion against the host API version

        A missing or unparsable range is treated as unsatisfied.

        Raises:
            IncompatibleVersionError: If the host version is outside the range
        """
        if not manifest.required_api_version:
            logger.warning(f"No requiredApiVersion declared by {manifest.name}")
            raise IncompatibleVersionError(manifest.to_dict(), self.host_api_version)

        try:
            spec = semantic_version.NpmSpec(manifest.required_api_version)
        except ValueError as e:
            logger.warning(
                f"Unparsable requiredApiVersion {manifest.required_api_version!r} for {manifest.name}"
            )
            raise IncompatibleVersionError(manifest.to_dict(), self.host_api_version) from e

        if not spec.match(self._host_version):
            raise IncompatibleVersionError(manifest.to_dict(), self.host_api_version)

    def validate(self, raw: bytes) -> Tuple[PackageManifest, List[IngestionDiagnostic]]:
        """
        Full manifest validation: parse, identity patch, schema, compatibility

        Args:
            raw: Manifest file bytes

        Returns:
            Tuple of (manifest, diagnostics)

        Raises:
            ManifestParseError: If the manifest cannot be parsed or is incomplete
            IncompatibleVersionError: If the host version is not supported
        """
        data = self.parse(raw)
        data, diagnostic = self.ensure_identity(data)
        manifest = self.build_manifest(data)
        self.check_compatibility(manifest)

        logger.info(
            f"Manifest validation passed: {manifest.name} ({manifest.id}) "
            f"requires {manifest.required_api_version}, host {self.host_api_version}"
        )
        return manifest, [diagnostic] if diagnostic else []
