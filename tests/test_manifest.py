import json

from buildrec.contracts.manifest import MANIFEST_NAME, load_record, save_record
from buildrec.records.artifact_record import ArtifactRecord


def test_round_trip_keeps_attached_order(make_build, archived):
    build = make_build()
    attached = [archived(build, "jar", classifier=c) for c in ("z", "a", "m")]
    record = ArtifactRecord(build, archived(build, "pom"), archived(build, "jar"), attached)

    path = save_record(record)
    loaded = load_record(build)

    assert path == build.artifacts_dir / MANIFEST_NAME
    assert [a.classifier for a in loaded.attached_artifacts] == ["z", "a", "m"]
    assert loaded.main_artifact == record.main_artifact
    assert not loaded.is_pom()


def test_pom_only_record_reloads_with_shared_main(make_build, archived):
    build = make_build()
    record = ArtifactRecord(build, archived(build, "pom"))

    path = save_record(record)
    loaded = load_record(build)

    assert json.loads(path.read_text())["main_artifact"] is None
    assert loaded.main_artifact is loaded.pom_artifact
