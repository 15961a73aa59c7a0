import logging
from typing import Dict, List, Optional, Sequence

from ..contracts.artifact import Artifact
from ..contracts.toolchain import (
    ArtifactFactory,
    ArtifactHandlerManager,
    Deployer,
    DeploymentRepository,
    FingerprintMap,
    Installer,
    LEGACY_DEPLOYER,
    ProjectArtifactMetadata,
    TaskListener,
    UNIQUE_VERSION_DEPLOYER,
    Toolchain,
    ToolchainArtifact,
)
from ..memory.fingerprints import FingerprintStore
from ..toolchain.mode import ToolchainMode
from .base import AbstractArtifactRecord

logger = logging.getLogger(__name__)


class ArtifactRecord(AbstractArtifactRecord):
    """
    Artifacts produced by one module build: the POM, the main artifact and
    any attached artifacts.

    For a POM-only module the main artifact *is* the POM artifact (same
    object), so callers never need a separate code path for it.

    Neither ``deploy`` nor ``install`` is transactional: artifacts are written
    one at a time, and whatever was written before a failure stays written.
    """

    def __init__(self, parent, pom_artifact: Artifact, main_artifact: Optional[Artifact] = None,
                 attached_artifacts: Sequence[Artifact] = ()):
        if parent is None:
            raise ValueError("parent build is required")
        if pom_artifact is None:
            raise ValueError("pom_artifact is required")
        if attached_artifacts is None:
            raise ValueError("attached_artifacts must not be None")
        if main_artifact is None:
            main_artifact = pom_artifact

        self._parent = parent
        self._pom_artifact = pom_artifact
        self._main_artifact = main_artifact
        self._attached_artifacts = tuple(attached_artifacts)

    @property
    def parent(self):
        return self._parent

    @property
    def build(self):
        return self._parent

    @property
    def pom_artifact(self) -> Artifact:
        return self._pom_artifact

    @property
    def main_artifact(self) -> Artifact:
        return self._main_artifact

    @property
    def attached_artifacts(self) -> tuple:
        return self._attached_artifacts

    def is_pom(self) -> bool:
        """True if the module produced nothing but its POM."""
        return self._main_artifact == self._pom_artifact

    is_descriptor_only = is_pom

    def create_aggregated_action(self, module_set_build, module_builds: Dict[str, List]):
        from .aggregated import AggregatedArtifactRecord
        return AggregatedArtifactRecord(module_set_build, module_builds)

    def _main_toolchain_artifact(self, handler_manager: ArtifactHandlerManager,
                                 factory: ArtifactFactory) -> ToolchainArtifact:
        main = self._main_artifact.to_toolchain_artifact(handler_manager, factory, self._parent)
        if not self.is_pom():
            main.add_metadata(ProjectArtifactMetadata(main, self._pom_artifact.get_file(self._parent)))
        return main

    def deploy(self, toolchain: Toolchain, repository: DeploymentRepository, listener: TaskListener):
        """
        Deploy the main artifact (with its POM) and then every attached
        artifact, in order, to ``repository``.

        ``repository.unique_version`` is overwritten with the effective mode
        unless the toolchain cannot honour the configured one (see below).
        """
        handler_manager = toolchain.lookup(ArtifactHandlerManager)
        factory = toolchain.lookup(ArtifactFactory)
        mode = ToolchainMode.from_version(self._parent.module_set_build.toolchain_version)

        unique_version = True
        if repository.unique_version:
            repository.unique_version = True
        elif mode is ToolchainMode.MODERN:
            # modern toolchains always timestamp snapshots; go ahead unique
            listener.write_line("uniqueVersion == false is not anymore supported in maven 3")
        elif mode is ToolchainMode.LEGACY:
            repository.unique_version = False
            unique_version = False
        logger.debug("Deploying %s with mode=%s unique_version=%s", self.url, mode.value, unique_version)

        main = self._main_toolchain_artifact(handler_manager, factory)
        deployer = toolchain.lookup(Deployer, UNIQUE_VERSION_DEPLOYER if unique_version else LEGACY_DEPLOYER)
        local_repository = toolchain.local_repository

        # the main artifact carries the POM along with it
        listener.write_line(f"Deploying the main artifact {main.file.name}")
        deployer.deploy(main.file, main, repository, local_repository)

        for aa in self._attached_artifacts:
            a = aa.to_toolchain_artifact(handler_manager, factory, self._parent)
            listener.write_line(f"Deploying the attached artifact {a.file.name}")
            deployer.deploy(a.file, a, repository, local_repository)

    def install(self, toolchain: Toolchain):
        """Install the main artifact (with its POM) and the attached artifacts to the local repository."""
        handler_manager = toolchain.lookup(ArtifactHandlerManager)
        installer = toolchain.lookup(Installer)
        factory = toolchain.lookup(ArtifactFactory)
        local_repository = toolchain.local_repository

        main = self._main_toolchain_artifact(handler_manager, factory)
        installer.install(self._main_artifact.get_file(self._parent), main, local_repository)

        for aa in self._attached_artifacts:
            installer.install(aa.get_file(self._parent),
                              aa.to_toolchain_artifact(handler_manager, factory, self._parent),
                              local_repository)

    def record_fingerprints(self, fingerprints: Optional[FingerprintMap] = None):
        """Fingerprint the main artifact, then each attached one. Stops at the first failure."""
        if fingerprints is None:
            fingerprints = FingerprintStore()
        if self._main_artifact is not None:
            self._main_artifact.record_fingerprint(self._parent, fingerprints)
        for a in self._attached_artifacts:
            a.record_fingerprint(self._parent, fingerprints)

    def __repr__(self):
        return f"ArtifactRecord({self._parent.url!r}, main={self._main_artifact}, attached={len(self._attached_artifacts)})"
