import pytest

from buildrec.contracts.toolchain import Deployer, DeploymentRepository, Installer
from buildrec.errors import ArtifactDeploymentError, ComponentLookupError
from buildrec.records.artifact_record import ArtifactRecord
from buildrec.toolchain.filesystem import FilesystemToolchain
from buildrec.toolchain.registry import ComponentRegistry

from conftest import RecordingListener


def _record(make_build, archived, toolchain_version="3.9.6", version="1.0-SNAPSHOT"):
    build = make_build(toolchain_version)
    pom = archived(build, "pom", version=version)
    main = archived(build, "jar", version=version)
    sources = archived(build, "java-source", classifier="sources", version=version, extension="jar")
    return ArtifactRecord(build, pom, main, [sources])


def test_registry_lookup_and_missing_component():
    registry = ComponentRegistry()
    registry.register(Installer, lambda: "installer")

    assert registry.lookup(Installer) == "installer"
    assert registry.list_components() == {"Installer:default": "<lambda>"}
    with pytest.raises(ComponentLookupError, match="Deployer:maven2"):
        registry.lookup(Deployer, "maven2")


def test_deploy_unique_snapshot_timestamps_all_artifacts(make_build, archived, tmp_path):
    record = _record(make_build, archived)
    repo_dir = tmp_path / "remote"
    repository = DeploymentRepository("snapshots", f"file://{repo_dir}")

    record.deploy(FilesystemToolchain(str(tmp_path / "local")), repository, RecordingListener())

    version_dir = repo_dir / "com" / "example" / "app" / "1.0-SNAPSHOT"
    names = sorted(p.name for p in version_dir.iterdir() if p.suffix in (".jar", ".pom"))
    assert len(names) == 3
    stamps = {n.split("1.0-")[1][:17] for n in names}
    assert len(stamps) == 1
    assert all(n.startswith("app-1.0-") and "SNAPSHOT" not in n for n in names)
    assert any(n.endswith("-1-sources.jar") for n in names)


def test_deploy_legacy_non_unique_keeps_snapshot_names(make_build, archived, tmp_path):
    record = _record(make_build, archived, toolchain_version="2.2.1")
    repo_dir = tmp_path / "remote"
    repository = DeploymentRepository("snapshots", str(repo_dir), unique_version=False)

    record.deploy(FilesystemToolchain(str(tmp_path / "local")), repository, RecordingListener())

    version_dir = repo_dir / "com" / "example" / "app" / "1.0-SNAPSHOT"
    assert sorted(p.name for p in version_dir.iterdir()) == [
        "app-1.0-SNAPSHOT-sources.jar",
        "app-1.0-SNAPSHOT.jar",
        "app-1.0-SNAPSHOT.pom",
    ]


def test_release_cannot_be_deployed_twice(make_build, archived, tmp_path):
    record = _record(make_build, archived, version="1.0")
    repository = DeploymentRepository("releases", str(tmp_path / "remote"))
    toolchain = FilesystemToolchain(str(tmp_path / "local"))

    record.deploy(toolchain, repository, RecordingListener())
    with pytest.raises(ArtifactDeploymentError, match="already deployed"):
        record.deploy(toolchain, repository, RecordingListener())


def test_install_into_local_repository(make_build, archived, tmp_path):
    record = _record(make_build, archived)
    toolchain = FilesystemToolchain(str(tmp_path / "local"))

    record.install(toolchain)

    version_dir = tmp_path / "local" / "com" / "example" / "app" / "1.0-SNAPSHOT"
    assert sorted(p.name for p in version_dir.iterdir()) == [
        "app-1.0-SNAPSHOT-sources.jar",
        "app-1.0-SNAPSHOT.jar",
        "app-1.0-SNAPSHOT.pom",
    ]
    assert (version_dir / "app-1.0-SNAPSHOT.jar").read_bytes() == b"app:jar:None"
