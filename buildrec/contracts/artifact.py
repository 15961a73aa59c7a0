import hashlib
import logging
import shutil
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ArtifactMissingError
from .toolchain import ArtifactFactory, ArtifactHandlerManager, FingerprintMap, TaskListener, ToolchainArtifact

logger = logging.getLogger(__name__)


def file_md5(path: Path) -> str:
    h = hashlib.md5()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            h.update(chunk)
    return h.hexdigest()


class Artifact(BaseModel):
    """
    One archived build output.

    The file is never stored as an absolute path: it is resolved against the
    owning build's artifact directory each time it is needed.
    """
    group_id: str
    artifact_id: str
    version: str
    type: str = Field(..., description="Packaging, e.g. jar, war, pom")
    classifier: Optional[str] = None
    file_name: str = Field(..., description="Name of the file as the build produced it")
    canonical_name: str = Field(..., description="Name of the archived copy inside the build")
    md5sum: str

    model_config = ConfigDict(frozen=True)

    @classmethod
    def create(cls, group_id: str, artifact_id: str, version: str, type: str, file,
               classifier: Optional[str] = None, extension: Optional[str] = None) -> "Artifact":
        """Describe a freshly produced file, hashing its content."""
        file = Path(file)
        if not file.is_file():
            raise ArtifactMissingError(f"Artifact file is missing: {file}")
        ext = extension or file.suffix.lstrip(".") or type
        canonical = f"{artifact_id}-{version}"
        if classifier:
            canonical += f"-{classifier}"
        canonical += f".{ext}"
        return cls(
            group_id=group_id,
            artifact_id=artifact_id,
            version=version,
            type=type,
            classifier=classifier,
            file_name=file.name,
            canonical_name=canonical,
            md5sum=file_md5(file),
        )

    @property
    def is_pom(self) -> bool:
        return self.type == "pom"

    def _archive_path(self, build) -> Path:
        return Path(build.artifacts_dir) / self.group_id / self.artifact_id / self.version / self.canonical_name

    def get_file(self, build) -> Path:
        """Locate the archived file inside ``build``."""
        f = self._archive_path(build)
        if not f.exists():
            raise ArtifactMissingError(f"Archived artifact is missing: {f}")
        return f

    def archive(self, build, source, listener: TaskListener):
        """Copy ``source`` into the build's artifact tree unless an identical copy is already there."""
        source = Path(source)
        target = self._archive_path(build)
        if not target.exists():
            listener.write_line(f"[BUILDREC] Archiving {source} to {target}")
        elif file_md5(source) != file_md5(target):
            listener.write_line(f"[BUILDREC] Re-archiving {source}")
        else:
            logger.debug("Not archiving %s, digest matches %s", source, target)
            return
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)

    def to_toolchain_artifact(self, handler_manager: ArtifactHandlerManager, factory: ArtifactFactory,
                              build) -> ToolchainArtifact:
        handler = handler_manager.get_artifact_handler(self.type)
        a = factory.create_artifact_with_classifier(
            self.group_id, self.artifact_id, self.version, self.type, self.classifier
        )
        a.handler = handler
        a.file = self.get_file(build)
        return a

    def record_fingerprint(self, build, fingerprints: FingerprintMap):
        self.get_file(build)
        return fingerprints.get_or_create(build, self.file_name, self.md5sum)

    def __str__(self):
        coords = f"{self.group_id}:{self.artifact_id}:{self.type}"
        if self.classifier:
            coords += f":{self.classifier}"
        return f"{coords}:{self.version}"
