import json, logging, os
from typing import Dict, Any

logger = logging.getLogger(__name__)


def append_jsonl(filepath: str, data: Dict[str, Any]):
    """
    Append one JSON object as a line of a JSONL file.

    Args:
        filepath: Path to JSONL file (parent directories are created)
        data: Dictionary to log
    """
    parent = os.path.dirname(filepath)
    if parent:
        os.makedirs(parent, exist_ok=True)

    with open(filepath, "a", encoding="utf-8") as f:
        f.write(json.dumps(data, separators=(",", ":")) + "\n")


def read_jsonl(filepath: str) -> list[Dict[str, Any]]:
    """
    Read a JSONL file, skipping blank and corrupt lines.

    Returns:
        List of logged objects, oldest first
    """
    if not os.path.exists(filepath):
        return []

    entries = []
    with open(filepath, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, 1):
            line = line.strip()
            if line:
                try:
                    entries.append(json.loads(line))
                except json.JSONDecodeError:
                    logger.warning("Skipping corrupt line %d of %s", lineno, filepath)
    return entries
