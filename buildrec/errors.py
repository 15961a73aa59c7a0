"""
Error taxonomy for artifact records.

Nothing here is retried or recovered; callers see these exactly as raised.
"""


class BuildRecError(Exception):
    """Base class for all buildrec errors."""


class ComponentLookupError(BuildRecError):
    """A toolchain capability (or deployer strategy) is not available."""

    def __init__(self, role: str, hint: str = None):
        self.role = role
        self.hint = hint
        where = f"{role}:{hint}" if hint else role
        super().__init__(f"Unable to look up component {where}")


class ArtifactMissingError(BuildRecError, OSError):
    """An archived artifact file cannot be found inside its build."""


class ArtifactDeploymentError(BuildRecError):
    """The remote repository refused an artifact."""


class ArtifactInstallationError(BuildRecError):
    """The local repository refused an artifact."""
