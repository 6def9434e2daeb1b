from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from core.errors import ValidationError
from core.interfaces import Modifier
from core.models import ModifierRef

logger = logging.getLogger(__name__)


class ModifierRegistry:
    """Lookup of modifiers by their stable id."""

    def __init__(self, modifiers: Optional[Iterable[Modifier]] = None) -> None:
        self._modifiers: Dict[str, Modifier] = {}
        for m in modifiers or ():
            self.register(m)

    def register(self, modifier: Modifier) -> None:
        if modifier.id in self._modifiers:
            raise ValidationError(f"Modifier already registered: {modifier.id}")
        self._modifiers[modifier.id] = modifier

    def has(self, modifier_id: str) -> bool:
        return modifier_id in self._modifiers

    def get(self, modifier_id: str) -> Modifier:
        try:
            return self._modifiers[modifier_id]
        except KeyError:
            raise ValidationError(f"Unknown modifier: {modifier_id}") from None

    @property
    def ids(self) -> List[str]:
        return list(self._modifiers)

    def apply(self, refs: Sequence[ModifierRef], path: str, content: str) -> str:
        """Apply referenced modifiers in declared order where they support `path`."""
        for ref in refs:
            if not self.has(ref.id):
                logger.warning("Modifier %r is not registered, skipping for %s", ref.id, path)
                continue
            modifier = self.get(ref.id)
            if modifier.supports(path):
                content = modifier.modify(content, ref.context)
        return content


def default_registry() -> ModifierRegistry:
    from modifiers.python_signature import PythonSignatureModifier
    from modifiers.sanitizer import SanitizerModifier

    return ModifierRegistry([SanitizerModifier(), PythonSignatureModifier()])
