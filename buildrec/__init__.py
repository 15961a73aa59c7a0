"""
buildrec - build artifact records for CI servers.

Remembers which artifacts a build produced and redeploys or installs them
through a package-management toolchain.
"""

__version__ = "1.0.0"

from .contracts.artifact import Artifact
from .records.artifact_record import ArtifactRecord
from .records.aggregated import AggregatedArtifactRecord
from .toolchain.mode import ToolchainMode

__all__ = [
    "Artifact",
    "ArtifactRecord",
    "AggregatedArtifactRecord",
    "ToolchainMode",
]
