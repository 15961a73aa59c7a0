import re
from enum import Enum
from typing import Optional

from packaging.version import Version

_LEADING_VERSION = re.compile(r"^\s*(\d+(?:\.\d+)*)")


class ToolchainMode(str, Enum):
    """Major-version families of the toolchain with different deploy semantics."""
    LEGACY = "legacy"   # 2.x: non-unique (plain SNAPSHOT) deployments allowed
    MODERN = "modern"   # 3.x and later: snapshots are always timestamped

    @classmethod
    def from_version(cls, version: Optional[str]) -> "ToolchainMode":
        """
        Classify a recorded toolchain version string.

        Blank or unparsable versions are treated as LEGACY.
        """
        if not version or not version.strip():
            return cls.LEGACY
        m = _LEADING_VERSION.match(version)
        if not m:
            return cls.LEGACY
        return cls.MODERN if Version(m.group(1)) >= Version("3.0") else cls.LEGACY
