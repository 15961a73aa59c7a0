"""
Collaborator contracts between artifact records and the package-management
toolchain.

Records only talk to the toolchain through these classes. Concrete
toolchains subclass them (see ``buildrec.toolchain.filesystem``); tests
substitute fakes.
"""
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Type, TypeVar

T = TypeVar("T")

# deployer hints
UNIQUE_VERSION_DEPLOYER = "default"
LEGACY_DEPLOYER = "maven2"


@dataclass
class ArtifactHandler:
    type: str
    extension: str
    classifier: Optional[str] = None
    packaging: Optional[str] = None


@dataclass
class ProjectArtifactMetadata:
    """Descriptor (POM) file travelling with a main artifact."""
    artifact: "ToolchainArtifact" = field(repr=False, compare=False)
    file: Path


@dataclass
class ToolchainArtifact:
    """Toolchain-native artifact handed to deployers and installers."""
    group_id: str
    artifact_id: str
    version: str
    type: str
    classifier: Optional[str] = None
    file: Optional[Path] = None
    handler: Optional[ArtifactHandler] = None
    metadata: List[Any] = field(default_factory=list)

    def add_metadata(self, metadata: Any):
        self.metadata.append(metadata)

    @property
    def project_metadata(self) -> Optional[ProjectArtifactMetadata]:
        for md in self.metadata:
            if isinstance(md, ProjectArtifactMetadata):
                return md
        return None


class ArtifactHandlerManager:
    def get_artifact_handler(self, type: str) -> ArtifactHandler:
        raise NotImplementedError


class ArtifactFactory:
    def create_artifact_with_classifier(self, group_id: str, artifact_id: str, version: str,
                                        type: str, classifier: Optional[str]) -> ToolchainArtifact:
        raise NotImplementedError


class LocalRepository:
    def __init__(self, basedir):
        self.basedir = Path(basedir)


class DeploymentRepository:
    """
    Remote repository handle.

    ``unique_version`` is read AND written by deploy: records force it to
    the effective uniqueness mode before deploying. Callers must not assume
    the handle comes back unchanged.
    """

    def __init__(self, id: str, url: str, unique_version: bool = True):
        self.id = id
        self.url = url
        self.unique_version = unique_version


class Deployer:
    def deploy(self, file: Path, artifact: ToolchainArtifact,
               repository: DeploymentRepository, local_repository: LocalRepository):
        raise NotImplementedError


class Installer:
    def install(self, file: Path, artifact: ToolchainArtifact, local_repository: LocalRepository):
        raise NotImplementedError


class Toolchain:
    """
    Component container of the embedded toolchain.

    ``lookup`` raises ``ComponentLookupError`` when nothing is registered for
    the requested role and hint.
    """

    @property
    def local_repository(self) -> LocalRepository:
        raise NotImplementedError

    def lookup(self, role: Type[T], hint: str = "default") -> T:
        raise NotImplementedError


class TaskListener:
    """Line-oriented build log of the step running the operation."""

    def write_line(self, line: str):
        raise NotImplementedError


class FingerprintMap:
    def get_or_create(self, build, file_name: str, md5sum: str):
        raise NotImplementedError


class StreamTaskListener(TaskListener):
    def __init__(self, stream=None):
        self.stream = stream

    def write_line(self, line: str):
        stream = self.stream or sys.stdout
        stream.write(line + "\n")
        stream.flush()
