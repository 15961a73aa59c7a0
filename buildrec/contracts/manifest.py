"""
On-disk form of an artifact record, stored next to the build's archived
artifacts.
"""
import json
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from .artifact import Artifact

MANIFEST_NAME = "artifact-record.json"


class RecordManifest(BaseModel):
    pom_artifact: Artifact
    main_artifact: Optional[Artifact] = Field(None, description="Omitted when the module only has a POM")
    attached_artifacts: List[Artifact] = Field(default_factory=list)


def save_record(record, path: Path = None) -> Path:
    path = Path(path) if path else Path(record.build.artifacts_dir) / MANIFEST_NAME
    main = None if record.main_artifact is record.pom_artifact else record.main_artifact
    manifest = RecordManifest(
        pom_artifact=record.pom_artifact,
        main_artifact=main,
        attached_artifacts=list(record.attached_artifacts),
    )
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(manifest.model_dump(), indent=2), encoding="utf-8")
    return path


def load_record(build, path: Path = None):
    from ..records.artifact_record import ArtifactRecord
    path = Path(path) if path else Path(build.artifacts_dir) / MANIFEST_NAME
    manifest = RecordManifest(**json.loads(path.read_text(encoding="utf-8")))
    return ArtifactRecord(build, manifest.pom_artifact, manifest.main_artifact, manifest.attached_artifacts)
