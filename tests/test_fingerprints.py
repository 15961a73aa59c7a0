from buildrec.memory.fingerprints import FingerprintStore
from buildrec.records.artifact_record import ArtifactRecord


def test_get_or_create_keeps_original_build(make_build):
    store = FingerprintStore(":memory:")
    first = make_build(url="job/app/module/1/")
    second = make_build(url="job/app/module/2/")

    store.get_or_create(first, "app.jar", "abc")
    fp = store.get_or_create(second, "app-copy.jar", "abc")

    assert fp["original_build"] == "job/app/module/1/"
    assert fp["file_name"] == "app.jar"
    assert fp["usages"] == ["job/app/module/1/", "job/app/module/2/"]
    assert store.get("missing") is None


def test_record_fingerprints_into_store(make_build, archived, tmp_path):
    build = make_build()
    record = ArtifactRecord(build, archived(build, "pom"), archived(build, "jar"),
                            [archived(build, "jar", classifier="tests")])
    store = FingerprintStore(str(tmp_path / "fp.db"))

    record.record_fingerprints(store)

    fps = store.list_for_build(build.url)
    assert sorted(fp["file_name"] for fp in fps) == ["app-1.0-SNAPSHOT-tests.jar", "app-1.0-SNAPSHOT.jar"]
    assert store.get(record.main_artifact.md5sum)["usages"] == [build.url]
