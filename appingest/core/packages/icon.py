"""Icon extraction for app packages"""

import base64
import logging
import posixpath
from typing import Iterable, Optional

from appingest.core.packages.archive import PackageArchive
from appingest.core.packages.exceptions import InvalidIconError
from appingest.core.packages.sources import normalize_path

logger = logging.getLogger(__name__)

ALLOWED_ICON_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif")


class IconExtractor:
    """Loads the declared icon and encodes it as base64

    Extensions are compared case-insensitively: 'icon.PNG' is embedded
    like 'icon.png'.
    """

    def __init__(self, allowed_extensions: Iterable[str] = ALLOWED_ICON_EXTENSIONS):
        self.allowed_extensions = tuple(ext.lower() for ext in allowed_extensions)

    def extract(
        self,
        archive: PackageArchive,
        icon_path: Optional[str],
        package_name: Optional[str] = None,
        package_id: Optional[str] = None,
    ) -> Optional[str]:
        """
        Extract the icon bytes as base64

        Args:
            archive: Opened package archive
            icon_path: iconFile declared by the manifest

        Returns:
            Base64 string, or None when no usable icon is declared

        Raises:
            InvalidIconError: If the declared path is a directory
        """
        if not icon_path:
            return None

        ext = posixpath.splitext(icon_path)[1].lower()
        if ext not in self.allowed_extensions:
            logger.info(f"Ignoring icon {icon_path}: extension {ext or '(none)'} is not allowed")
            return None

        entry = archive.get(icon_path) or archive.get(normalize_path(icon_path))
        if entry is None:
            logger.warning(f"Declared icon {icon_path} not found in package {package_name}")
            return None

        if entry.is_directory:
            raise InvalidIconError(icon_path, package_id=package_id, package_name=package_name)

        return base64.b64encode(entry.content).decode("ascii")
