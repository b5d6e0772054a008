"""Host API version providers"""

from typing import Optional, Protocol, Union, runtime_checkable

import semantic_version

from appingest.core.config import IngestionSettings, get_config
from appingest.core.packages.exceptions import ConfigurationError


@runtime_checkable
class HostVersionProvider(Protocol):
    """Exposes the currently published host API version"""

    def get_api_version(self) -> str:
        ...


class StaticVersionProvider:
    """Provider returning a fixed version string"""

    def __init__(self, version: str):
        self.version = version

    def get_api_version(self) -> str:
        return self.version


class SettingsVersionProvider:
    """Provider reading host_api_version from IngestionSettings"""

    def __init__(self, settings: Optional[IngestionSettings] = None):
        self.settings = settings

    def get_api_version(self) -> str:
        settings = self.settings or get_config()
        return settings.host_api_version


def resolve_host_version(source: Union[str, HostVersionProvider]) -> str:
    """
    Resolve a host version from a literal or a provider

    Args:
        source: Version string or HostVersionProvider

    Returns:
        Validated semantic version string

    Raises:
        ConfigurationError: If the version is not a valid semantic version
    """
    version = source if isinstance(source, str) else source.get_api_version()

    if not isinstance(version, str) or not semantic_version.validate(version):
        raise ConfigurationError(f"Host API version must be a semantic version, got {version!r}")

    return version
