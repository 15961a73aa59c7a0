import logging
from typing import Any, Callable, Dict, Tuple

from ..errors import ComponentLookupError

logger = logging.getLogger(__name__)


class ComponentRegistry:
    """
    Components of a toolchain keyed by role and hint.

    A registered factory is called on every lookup, so stateful components
    (deployers) start fresh for each operation.
    """

    def __init__(self):
        self._components: Dict[Tuple[str, str], Callable[[], Any]] = {}

    @staticmethod
    def _role_name(role) -> str:
        return role if isinstance(role, str) else role.__name__

    def register(self, role, factory: Callable[[], Any], hint: str = "default"):
        key = (self._role_name(role), hint)
        self._components[key] = factory
        logger.debug("Registered component %s:%s", *key)

    def lookup(self, role, hint: str = "default") -> Any:
        name = self._role_name(role)
        factory = self._components.get((name, hint))
        if factory is None:
            raise ComponentLookupError(name, hint)
        return factory()

    def list_components(self) -> Dict[str, str]:
        return {f"{role}:{hint}": getattr(f, "__name__", type(f).__name__) for (role, hint), f in sorted(self._components.items())}
