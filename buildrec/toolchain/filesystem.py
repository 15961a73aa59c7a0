"""
A toolchain that deploys into directory-layout repositories.

Remote repositories are plain directories (or ``file://`` URLs) laid out as
``group/path/artifactId/version/artifactId-version[-classifier].ext``.
Snapshots deployed with unique versions get a ``timestamp-buildNumber``
suffix instead of ``SNAPSHOT``.
"""
import json
import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Tuple

from ..config import CONFIG
from ..contracts.toolchain import (
    ArtifactFactory,
    ArtifactHandler,
    ArtifactHandlerManager,
    Deployer,
    DeploymentRepository,
    Installer,
    LEGACY_DEPLOYER,
    LocalRepository,
    Toolchain,
    ToolchainArtifact,
    UNIQUE_VERSION_DEPLOYER,
)
from ..errors import ArtifactDeploymentError
from .registry import ComponentRegistry

logger = logging.getLogger(__name__)

SNAPSHOT = "SNAPSHOT"
METADATA_FILE = "buildrec-metadata.json"

# type -> (extension, classifier)
KNOWN_TYPES = {
    "pom": ("pom", None),
    "jar": ("jar", None),
    "war": ("war", None),
    "ear": ("ear", None),
    "rar": ("rar", None),
    "ejb": ("jar", None),
    "maven-plugin": ("jar", None),
    "test-jar": ("jar", "tests"),
    "java-source": ("jar", "sources"),
    "javadoc": ("jar", "javadoc"),
}


class DefaultArtifactHandlerManager(ArtifactHandlerManager):
    def __init__(self):
        self._handlers: Dict[str, ArtifactHandler] = {
            t: ArtifactHandler(type=t, extension=ext, classifier=cls, packaging=t)
            for t, (ext, cls) in KNOWN_TYPES.items()
        }

    def get_artifact_handler(self, type: str) -> ArtifactHandler:
        # unknown packagings use the type as extension
        if type not in self._handlers:
            self._handlers[type] = ArtifactHandler(type=type, extension=type, packaging=type)
        return self._handlers[type]


class DefaultArtifactFactory(ArtifactFactory):
    def create_artifact_with_classifier(self, group_id, artifact_id, version, type, classifier):
        return ToolchainArtifact(
            group_id=group_id,
            artifact_id=artifact_id,
            version=version,
            type=type,
            classifier=classifier,
        )


def repository_basedir(url: str) -> Path:
    return Path(url[len("file://"):] if url.startswith("file://") else url)


def artifact_dir(basedir: Path, artifact: ToolchainArtifact) -> Path:
    return Path(basedir).joinpath(*artifact.group_id.split(".")) / artifact.artifact_id / artifact.version


def artifact_file_name(artifact: ToolchainArtifact, version: str, extension: Optional[str] = None) -> str:
    if extension is None:
        extension = artifact.handler.extension if artifact.handler else artifact.type
    name = f"{artifact.artifact_id}-{version}"
    if artifact.classifier:
        name += f"-{artifact.classifier}"
    return f"{name}.{extension}"


def _copy_with_pom(file: Path, artifact: ToolchainArtifact, target_dir: Path, version: str) -> Path:
    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / artifact_file_name(artifact, version)
    shutil.copyfile(file, target)
    pom = artifact.project_metadata
    if pom is not None:
        shutil.copyfile(pom.file, target_dir / f"{artifact.artifact_id}-{version}.pom")
    return target


class FilesystemDeployer(Deployer):
    """
    Deploys into a directory repository.

    With ``always_unique`` snapshots are always timestamped; otherwise the
    repository's ``unique_version`` setting decides. One instance serves one
    deploy operation: every artifact of a version shares one timestamp.
    """

    def __init__(self, always_unique: bool = True):
        self.always_unique = always_unique
        self._snapshot_versions: Dict[Tuple[str, str, str], str] = {}

    def _unique_version(self, target_dir: Path, artifact: ToolchainArtifact) -> str:
        key = (artifact.group_id, artifact.artifact_id, artifact.version)
        if key not in self._snapshot_versions:
            md_file = target_dir / METADATA_FILE
            build_number = 1
            if md_file.exists():
                build_number = json.loads(md_file.read_text(encoding="utf-8"))["buildNumber"] + 1
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%d.%H%M%S")
            target_dir.mkdir(parents=True, exist_ok=True)
            md_file.write_text(json.dumps({"timestamp": timestamp, "buildNumber": build_number}), encoding="utf-8")
            base = artifact.version[:-len(SNAPSHOT)]
            self._snapshot_versions[key] = f"{base}{timestamp}-{build_number}"
        return self._snapshot_versions[key]

    def deploy(self, file: Path, artifact: ToolchainArtifact,
               repository: DeploymentRepository, local_repository: LocalRepository):
        target_dir = artifact_dir(repository_basedir(repository.url), artifact)
        version = artifact.version
        if version.endswith(SNAPSHOT):
            if self.always_unique or repository.unique_version:
                version = self._unique_version(target_dir, artifact)
        elif (target_dir / artifact_file_name(artifact, version)).exists():
            raise ArtifactDeploymentError(
                f"{artifact.group_id}:{artifact.artifact_id}:{version} is already deployed to {repository.id}"
            )
        target = _copy_with_pom(file, artifact, target_dir, version)
        logger.info("Deployed %s to %s", file, target)
        return target


class FilesystemInstaller(Installer):
    def install(self, file: Path, artifact: ToolchainArtifact, local_repository: LocalRepository):
        target = _copy_with_pom(file, artifact, artifact_dir(local_repository.basedir, artifact), artifact.version)
        logger.info("Installed %s to %s", file, target)
        return target


class FilesystemToolchain(Toolchain):
    """Toolchain whose repositories are plain directories."""

    def __init__(self, local_repository: str = None):
        self._local_repository = LocalRepository(local_repository or CONFIG["LOCAL_REPOSITORY"])
        self.registry = ComponentRegistry()
        handler_manager = DefaultArtifactHandlerManager()
        factory = DefaultArtifactFactory()
        self.registry.register(ArtifactHandlerManager, lambda: handler_manager)
        self.registry.register(ArtifactFactory, lambda: factory)
        self.registry.register(Deployer, lambda: FilesystemDeployer(always_unique=True), hint=UNIQUE_VERSION_DEPLOYER)
        self.registry.register(Deployer, lambda: FilesystemDeployer(always_unique=False), hint=LEGACY_DEPLOYER)
        self.registry.register(Installer, FilesystemInstaller)

    @property
    def local_repository(self) -> LocalRepository:
        return self._local_repository

    def lookup(self, role, hint: str = "default"):
        return self.registry.lookup(role, hint)
