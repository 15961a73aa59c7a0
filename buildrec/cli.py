#!/usr/bin/env python3
"""
buildrec command line interface
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from .config import CONFIG
from .contracts.artifact import Artifact
from .contracts.build import ModuleBuild, ModuleSetBuild
from .contracts.manifest import load_record, save_record
from .contracts.toolchain import DeploymentRepository, StreamTaskListener
from .errors import BuildRecError
from .memory.fingerprints import FingerprintStore
from .memory.history import DeploymentHistory
from .records.artifact_record import ArtifactRecord
from .toolchain.filesystem import FilesystemToolchain

logger = logging.getLogger(__name__)


def setup_logging(level: str = None, log_file: str = None):
    """Configure logging; build output goes to stdout, logs to stderr."""
    log_level = getattr(logging, (level or CONFIG["LOG_LEVEL"]).upper())

    handlers = [logging.StreamHandler(sys.stderr)]

    log_file = log_file or CONFIG["LOG_FILE"]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=handlers
    )


def _build(args) -> ModuleBuild:
    return ModuleBuild(
        url=args.build_url,
        artifacts_dir=Path(args.build_dir),
        module_set_build=ModuleSetBuild(url=args.build_url, toolchain_version=args.toolchain_version),
    )


def _parse_attach(spec: str):
    """Split TYPE:CLASSIFIER:FILE; the classifier may be empty."""
    if spec.count(":") < 2:
        raise BuildRecError(f"Invalid --attach value {spec!r}, expected TYPE:CLASSIFIER:FILE")
    type_, classifier, path = spec.split(":", 2)
    return type_, classifier or None, path


def cmd_archive(args):
    """Archive build outputs and write the record manifest"""
    attach_specs = [_parse_attach(spec) for spec in args.attach]
    build = _build(args)
    listener = StreamTaskListener()
    coords = dict(group_id=args.group, artifact_id=args.artifact, version=args.version)

    pom = Artifact.create(type="pom", file=args.pom, extension="pom", **coords)
    pom.archive(build, args.pom, listener)

    main = None
    if args.main:
        main = Artifact.create(type=args.packaging, file=args.main, **coords)
        main.archive(build, args.main, listener)

    attached = []
    for type_, classifier, path in attach_specs:
        a = Artifact.create(type=type_, file=path, classifier=classifier, **coords)
        a.archive(build, path, listener)
        attached.append(a)

    record = ArtifactRecord(build, pom, main, attached)
    path = save_record(record)
    print(f"📦 Recorded {1 + len(attached) + (0 if record.is_pom() else 1)} artifacts in {path}")


def cmd_show(args):
    """Show the artifacts recorded for a build"""
    record = load_record(_build(args))
    if args.json:
        print(json.dumps({
            "url": record.url,
            "pom": record.is_pom(),
            "pom_artifact": record.pom_artifact.model_dump(),
            "main_artifact": record.main_artifact.model_dump(),
            "attached_artifacts": [a.model_dump() for a in record.attached_artifacts],
        }, indent=2))
        return
    print(f"📦 {record.url}")
    print(f"  pom:  {record.pom_artifact}")
    if not record.is_pom():
        print(f"  main: {record.main_artifact}")
    for a in record.attached_artifacts:
        print(f"  attached: {a}")


def cmd_deploy(args):
    """Deploy recorded artifacts to a remote repository"""
    record = load_record(_build(args))
    repository = DeploymentRepository(args.repo_id, args.repo_url, unique_version=not args.non_unique)
    toolchain = FilesystemToolchain(args.local_repo)
    attempt = record.redeploy(toolchain, repository, StreamTaskListener(), DeploymentHistory(args.history))
    print(f"🚀 Deployed to {repository.id} ({attempt.result})")


def cmd_install(args):
    """Install recorded artifacts to the local repository"""
    record = load_record(_build(args))
    toolchain = FilesystemToolchain(args.local_repo)
    record.install(toolchain)
    print(f"✅ Installed into {toolchain.local_repository.basedir}")


def cmd_fingerprint(args):
    """Record fingerprints of the build's artifacts"""
    build = _build(args)
    record = load_record(build)
    store = FingerprintStore(args.db)
    record.record_fingerprints(store)
    for fp in store.list_for_build(build.url):
        print(f"  {fp['md5sum']}  {fp['file_name']}  (origin: {fp['original_build']})")


def cmd_history(args):
    """List redeploy attempts"""
    attempts = DeploymentHistory(args.history).list(args.record_url)
    if not attempts:
        print("📂 No deployments yet.")
        return
    for a in attempts:
        status = "✅" if a.result == "SUCCESS" else "❌"
        print(f"  {status} {a.started_at} {a.record_url} -> {a.repository_id} {a.error or ''}".rstrip())


def _add_build_args(p):
    p.add_argument("--build-dir", required=True, help="Directory holding the build's archived artifacts")
    p.add_argument("--build-url", default="build/", help="Build URL relative to the server root")
    p.add_argument("--toolchain-version", default=None, help="Toolchain version the build ran with")


def main(argv=None):
    parser = argparse.ArgumentParser(description="buildrec - build artifact records")
    parser.add_argument("--log-level", default=None, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    archive_parser = subparsers.add_parser("archive", help="Archive outputs and record them")
    _add_build_args(archive_parser)
    archive_parser.add_argument("--group", required=True)
    archive_parser.add_argument("--artifact", required=True)
    archive_parser.add_argument("--version", required=True)
    archive_parser.add_argument("--pom", required=True, help="Project descriptor file")
    archive_parser.add_argument("--main", default=None, help="Main artifact file (omit for POM modules)")
    archive_parser.add_argument("--packaging", default="jar")
    archive_parser.add_argument("--attach", nargs="*", default=[], help="Attached artifacts as TYPE:CLASSIFIER:FILE")
    archive_parser.set_defaults(func=cmd_archive)

    show_parser = subparsers.add_parser("show", help="Show a build's record")
    _add_build_args(show_parser)
    show_parser.add_argument("--json", action="store_true", help="Output as JSON")
    show_parser.set_defaults(func=cmd_show)

    deploy_parser = subparsers.add_parser("deploy", help="Deploy a build's artifacts")
    _add_build_args(deploy_parser)
    deploy_parser.add_argument("--repo-id", required=True)
    deploy_parser.add_argument("--repo-url", required=True, help="Repository directory or file:// URL")
    deploy_parser.add_argument("--non-unique", action="store_true", help="Request non-unique snapshot versions")
    deploy_parser.add_argument("--local-repo", default=None)
    deploy_parser.add_argument("--history", default=None, help="Deployment history file")
    deploy_parser.set_defaults(func=cmd_deploy)

    install_parser = subparsers.add_parser("install", help="Install a build's artifacts locally")
    _add_build_args(install_parser)
    install_parser.add_argument("--local-repo", default=None)
    install_parser.set_defaults(func=cmd_install)

    fp_parser = subparsers.add_parser("fingerprint", help="Record artifact fingerprints")
    _add_build_args(fp_parser)
    fp_parser.add_argument("--db", default=None, help="Fingerprint database")
    fp_parser.set_defaults(func=cmd_fingerprint)

    history_parser = subparsers.add_parser("history", help="List deployments")
    history_parser.add_argument("--record-url", default=None)
    history_parser.add_argument("--history", default=None, help="Deployment history file")
    history_parser.set_defaults(func=cmd_history)

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)
    try:
        args.func(args)
    except (BuildRecError, OSError) as e:
        logger.error("%s failed: %s", args.command, e)
        sys.exit(2)


if __name__ == "__main__":
    main()
