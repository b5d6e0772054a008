"""Data models for the app package ingestion pipeline"""

import re
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

UUID4_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-4[0-9a-fA-F]{3}-[89abAB][0-9a-fA-F]{3}-[0-9a-fA-F]{12}$"
)


class DiagnosticStage(str, Enum):
    """Pipeline stage that emitted a non-fatal diagnostic"""
    IDENTITY = "identity"
    LOCALIZATION = "localization"
    ICON = "icon"


class IngestionDiagnostic(BaseModel):
    """A non-fatal advisory produced while ingesting a package"""
    model_config = ConfigDict(frozen=True)

    stage: DiagnosticStage
    path: Optional[str] = None
    message: str


class PackageManifest(BaseModel):
    """app.json schema

    Keys are camelCase on the wire; any extra declared metadata is kept
    and dumped back unchanged.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(description="UUIDv4 identity of the app")
    name: str = Field(description="Human-readable app name")
    class_file: str = Field(alias="classFile", description="Path to the entry-point source file")
    icon_file: Optional[str] = Field(default=None, alias="iconFile", description="Path to icon file")
    required_api_version: Optional[str] = Field(
        default=None,
        alias="requiredApiVersion",
        description="Semver range the host API version must satisfy (e.g. '>=1.2.0'); absent means unsatisfiable",
    )
    icon_file_content: Optional[str] = Field(
        default=None,
        alias="iconFileContent",
        description="Base64 icon bytes, attached during ingestion",
    )

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Validate UUIDv4 shape"""
        if not UUID4_PATTERN.match(v):
            raise ValueError(f"App id must be a UUIDv4, got {v!r}")
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Dump back to the app.json wire shape"""
        return self.model_dump(by_alias=True, exclude_none=True)


class SourceFile(BaseModel):
    """A source file collected from the package archive"""
    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Normalized archive-relative path")
    content: str
    version: int = Field(default=0, ge=0)
    compiled: Optional[str] = None

    def with_compiled(self, compiled: str) -> "SourceFile":
        """Return a new revision of this file carrying compiled output"""
        return self.model_copy(update={"compiled": compiled, "version": self.version + 1})


class LocalizationBundle(BaseModel):
    """Merged translations keyed by lower-cased language code"""
    languages: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    diagnostics: List[IngestionDiagnostic] = Field(default_factory=list)


class IngestionResult(BaseModel):
    """Install-ready output of a successful ingestion

    Fields cannot be reassigned and diagnostics are a tuple. The pipeline
    builds the mappings from private copies, so nothing it collected is
    shared with the caller.
    """
    model_config = ConfigDict(frozen=True)

    manifest: PackageManifest
    compiled_files: Dict[str, str] = Field(description="Encoded source path -> compiled content")
    language_content: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    diagnostics: Tuple[IngestionDiagnostic, ...] = ()
    sha256: str = Field(description="SHA256 of the raw archive bytes")
