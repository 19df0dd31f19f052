"""Common Generator - helpers shared by every generated Java source"""

import logging
from typing import Optional

from .types import Lifecycle, Release, DEPRECATED

logger = logging.getLogger(__name__)


class CommonGenerator:
    """Licence header, javadoc escaping and release branding"""

    def __init__(self, releases: list[Release], licence_header: str = ""):
        self.releases = {r.code_name: r for r in releases}
        self.licence_header = licence_header

    def licence_lines(self) -> list[str]:
        if not self.licence_header:
            return []
        return self.licence_header.splitlines() + ["", ""]

    @staticmethod
    def escape_xml(text: str) -> str:
        """Escape text for use inside a javadoc comment"""
        return (text.replace("&", "&amp;")
                    .replace("<", "&lt;")
                    .replace(">", "&gt;"))

    @classmethod
    def escape_javadoc(cls, text: str) -> str:
        """escape_xml, and keep text from closing the surrounding comment"""
        return cls.escape_xml(text).replace("*/", "* /")

    def release_branding(self, code_name: str) -> str:
        release = self.releases.get(code_name)
        if release is None:
            logger.debug("No branding for release '%s', using the code name", code_name)
            return code_name
        return release.branding

    def deprecated_release_name(self, lifecycle: Lifecycle) -> Optional[str]:
        """Branding of the release an item was deprecated in, if it was"""
        if lifecycle.deprecated:
            return self.release_branding(lifecycle.deprecated)
        if lifecycle.state == DEPRECATED:
            return "unknown"
        return None

    def deprecated_annotation(self, lifecycle: Lifecycle) -> str:
        version = self.deprecated_release_name(lifecycle)
        if version is None:
            return ""
        return f'@Deprecated(since = "{version}")'

    def published_info(self, lifecycle: Lifecycle) -> str:
        """Sentence describing when an item appeared and was deprecated"""
        parts = []
        if lifecycle.published:
            parts.append(f"First published in {self.release_branding(lifecycle.published)}.")
        if lifecycle.deprecated:
            parts.append(f"Deprecated since {self.release_branding(lifecycle.deprecated)}.")
        return " ".join(parts)
