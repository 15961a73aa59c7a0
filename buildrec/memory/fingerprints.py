import sqlite3
import time
from typing import Any, Dict, List, Optional

from ..config import CONFIG
from ..contracts.toolchain import FingerprintMap


class FingerprintStore(FingerprintMap):
    """
    sqlite-backed fingerprint map.

    A fingerprint is keyed by md5sum; the first build that records it is its
    origin, every build that records it again is added as a usage.
    """

    def __init__(self, db_path: str = None):
        self.db_path = db_path or CONFIG["FINGERPRINT_DB"]
        if self.db_path == ":memory:":
            # keep one connection, otherwise each connect() gets an empty db
            self._conn = sqlite3.connect(":memory:")
        else:
            self._conn = None
        self._init_db()

    def _connect(self):
        return self._conn if self._conn is not None else sqlite3.connect(self.db_path)

    def _init_db(self):
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS fingerprints (
                    md5sum TEXT PRIMARY KEY,
                    file_name TEXT,
                    original_build TEXT,
                    created_at REAL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS usages (
                    md5sum TEXT,
                    build_url TEXT,
                    PRIMARY KEY (md5sum, build_url)
                )
            """)

    def get_or_create(self, build, file_name: str, md5sum: str) -> Dict[str, Any]:
        with self._connect() as conn:
            conn.execute(
                "INSERT OR IGNORE INTO fingerprints VALUES (?, ?, ?, ?)",
                (md5sum, file_name, build.url, time.time())
            )
            conn.execute(
                "INSERT OR IGNORE INTO usages VALUES (?, ?)",
                (md5sum, build.url)
            )
        return self.get(md5sum)

    def get(self, md5sum: str) -> Optional[Dict[str, Any]]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM fingerprints WHERE md5sum = ?", (md5sum,)
            ).fetchone()
            if not row:
                return None
            usages = conn.execute(
                "SELECT build_url FROM usages WHERE md5sum = ? ORDER BY build_url", (md5sum,)
            ).fetchall()

        return {
            "md5sum": row[0],
            "file_name": row[1],
            "original_build": row[2],
            "created_at": row[3],
            "usages": [u[0] for u in usages],
        }

    def list_for_build(self, build_url: str) -> List[Dict[str, Any]]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT md5sum FROM usages WHERE build_url = ? ORDER BY md5sum", (build_url,)
            ).fetchall()
        return [self.get(r[0]) for r in rows]
