import os
import sys

import pytest

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from buildrec.contracts.artifact import Artifact
from buildrec.contracts.build import ModuleBuild, ModuleSetBuild
from buildrec.contracts.toolchain import (
    ArtifactFactory,
    ArtifactHandlerManager,
    Deployer,
    FingerprintMap,
    Installer,
    LocalRepository,
    TaskListener,
    Toolchain,
)
from buildrec.errors import ArtifactDeploymentError, ArtifactInstallationError, ComponentLookupError
from buildrec.toolchain.filesystem import DefaultArtifactFactory, DefaultArtifactHandlerManager


class RecordingListener(TaskListener):
    def __init__(self):
        self.lines = []

    def write_line(self, line):
        self.lines.append(line)


class RecordingDeployer(Deployer):
    def __init__(self, calls, fail_on=None):
        self.calls = calls
        self.fail_on = fail_on

    def deploy(self, file, artifact, repository, local_repository):
        if file.name == self.fail_on:
            raise ArtifactDeploymentError(f"rejected {file.name}")
        self.calls.append((file.name, artifact, repository, local_repository))


class RecordingInstaller(Installer):
    def __init__(self, calls, fail_on=None):
        self.calls = calls
        self.fail_on = fail_on

    def install(self, file, artifact, local_repository):
        if file.name == self.fail_on:
            raise ArtifactInstallationError(f"rejected {file.name}")
        self.calls.append((file.name, artifact, local_repository))


class FakeToolchain(Toolchain):
    """Records lookups and deploy/install calls instead of touching a repository."""

    def __init__(self, fail_on=None, missing=()):
        self.lookups = []
        self.deployed = []
        self.installed = []
        self.fail_on = fail_on
        self.missing = set(missing)
        self._local = LocalRepository("/tmp/fake-local-repo")
        self._handlers = DefaultArtifactHandlerManager()
        self._factory = DefaultArtifactFactory()

    @property
    def local_repository(self):
        return self._local

    def lookup(self, role, hint="default"):
        self.lookups.append((role.__name__, hint))
        if (role.__name__, hint) in self.missing:
            raise ComponentLookupError(role.__name__, hint)
        if role is ArtifactHandlerManager:
            return self._handlers
        if role is ArtifactFactory:
            return self._factory
        if role is Deployer:
            return RecordingDeployer(self.deployed, self.fail_on)
        if role is Installer:
            return RecordingInstaller(self.installed, self.fail_on)
        raise ComponentLookupError(role.__name__, hint)

    @property
    def deployer_hints(self):
        return [hint for role, hint in self.lookups if role == "Deployer"]


class RecordingFingerprints(FingerprintMap):
    def __init__(self, fail_on_call=None):
        self.calls = []
        self.fail_on_call = fail_on_call

    def get_or_create(self, build, file_name, md5sum):
        self.calls.append((build.url, file_name, md5sum))
        if len(self.calls) == self.fail_on_call:
            raise OSError(f"cannot write fingerprint for {file_name}")
        return md5sum


@pytest.fixture
def make_build(tmp_path):
    def _make(toolchain_version="3.9.6", url="job/app/module/7/"):
        parent = ModuleSetBuild(url="job/app/7/", toolchain_version=toolchain_version,
                                root_url="http://ci.example.com/")
        return ModuleBuild(url=url, artifacts_dir=tmp_path / "archive",
                           module_set_build=parent, root_url="http://ci.example.com/")
    return _make


@pytest.fixture
def archived(tmp_path):
    """Write a source file, describe it and archive it into ``build``."""
    def _archive(build, type, classifier=None, artifact_id="app", version="1.0-SNAPSHOT",
                 group_id="com.example", extension=None):
        suffix = f"-{classifier}" if classifier else ""
        src = tmp_path / "target" / f"{artifact_id}-{version}{suffix}.{extension or type}"
        src.parent.mkdir(parents=True, exist_ok=True)
        src.write_bytes(f"{artifact_id}:{type}:{classifier}".encode())
        a = Artifact.create(group_id, artifact_id, version, type, src, classifier=classifier, extension=extension)
        a.archive(build, src, RecordingListener())
        return a
    return _archive
