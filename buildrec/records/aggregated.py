from typing import Dict, List

from ..contracts.toolchain import DeploymentRepository, TaskListener, Toolchain
from .base import AbstractArtifactRecord


class AggregatedArtifactRecord(AbstractArtifactRecord):
    """Artifact records of every module of a multi-module build."""

    def __init__(self, module_set_build, module_builds: Dict[str, List] = None):
        self._build = module_set_build
        self.module_builds = dict(module_builds or {})

    @property
    def build(self):
        return self._build

    @property
    def module_records(self) -> list:
        """Records of the latest build of each module, in module order."""
        from .artifact_record import ArtifactRecord
        records = []
        for builds in self.module_builds.values():
            if not builds:
                continue
            record = builds[-1].get_action(ArtifactRecord)
            if record is not None:
                records.append(record)
        return records

    def deploy(self, toolchain: Toolchain, repository: DeploymentRepository, listener: TaskListener):
        for record in self.module_records:
            record.deploy(toolchain, repository, listener)
