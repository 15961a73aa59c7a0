"""
Deployment history: one JSONL line per redeploy attempt.
"""
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from ..config import CONFIG
from ..utils.jsonl import append_jsonl, read_jsonl


class DeploymentAttempt(BaseModel):
    attempt_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    record_url: str = Field(..., description="URL of the artifact record that was deployed")
    repository_id: str
    repository_url: str
    started_at: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    result: Optional[str] = Field(None, description="SUCCESS or FAILURE once finished")
    error: Optional[str] = None


class DeploymentHistory:
    def __init__(self, path: str = None):
        self.path = path or CONFIG["HISTORY_PATH"]

    def add(self, attempt: DeploymentAttempt):
        append_jsonl(self.path, attempt.model_dump())

    def list(self, record_url: Optional[str] = None) -> List[DeploymentAttempt]:
        attempts = [DeploymentAttempt(**e) for e in read_jsonl(self.path)]
        if record_url is not None:
            attempts = [a for a in attempts if a.record_url == record_url]
        return attempts

    def last(self, record_url: str) -> Optional[DeploymentAttempt]:
        attempts = self.list(record_url)
        return attempts[-1] if attempts else None
