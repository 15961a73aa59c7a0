from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Type, TypeVar

from ..config import CONFIG

T = TypeVar("T")


class _Actionable:
    """Builds carry the records attached to them as actions."""

    def add_action(self, action: Any):
        self.actions.append(action)

    def get_action(self, cls: Type[T]) -> Optional[T]:
        for a in self.actions:
            if isinstance(a, cls):
                return a
        return None

    @property
    def absolute_url(self) -> str:
        return self.root_url + self.url


@dataclass
class ModuleSetBuild(_Actionable):
    """The top-level build of a multi-module project."""
    url: str
    toolchain_version: Optional[str] = None
    root_url: str = CONFIG["ROOT_URL"]
    actions: List[Any] = field(default_factory=list)


@dataclass
class ModuleBuild(_Actionable):
    """
    One module build, the owner of an artifact record.

    Archived artifacts live under ``artifacts_dir``; records only ever store
    paths relative to it.
    """
    url: str
    artifacts_dir: Path
    module_set_build: ModuleSetBuild
    root_url: str = CONFIG["ROOT_URL"]
    actions: List[Any] = field(default_factory=list)

    def __post_init__(self):
        self.artifacts_dir = Path(self.artifacts_dir)
