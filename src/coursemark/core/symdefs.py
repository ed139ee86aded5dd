"""Symbol-definition cache.

Every course object of the same kind, in the same color, shares one symbol
definition per map. The cache lives as long as its map and is keyed by
(color id, shape key).
"""

from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import TypeVar

import structlog

from coursemark.domain.enums import FontStyle
from coursemark.domain.map import SymColor, SymDef

logger = structlog.get_logger(__name__)

SymDefT = TypeVar("SymDefT", bound=SymDef)


@dataclass(frozen=True, slots=True)
class TextSymDefKey:
    """Shape key of text objects: distinct fonts need distinct definitions."""

    font_name: str
    font_style: FontStyle
    em_height: float


class SymDefCache:
    """Insert-if-absent mapping from (color id, shape key) to a symbol definition.

    Never evicts. Create one per destination map.
    """

    def __init__(self) -> None:
        self._symdefs: dict[tuple[int, Hashable], SymDef] = {}

    def get_or_create(self, color: SymColor, key: Hashable, factory: Callable[[], SymDefT]) -> SymDefT:
        """Return the cached definition, calling factory only on a miss.

        Args:
            color: Color the definition is created for
            key: Shape key of the requesting object
            factory: Creates and registers the definition in the map

        Returns:
            The shared symbol definition
        """
        cache_key = (color.ocad_id, key)
        symdef = self._symdefs.get(cache_key)
        if symdef is None:
            symdef = factory()
            self._symdefs[cache_key] = symdef
            logger.debug("Symbol definition created", name=symdef.name, ocad_id=symdef.ocad_id, color=color.ocad_id)
        return symdef  # type: ignore[return-value]

    def __len__(self) -> int:
        return len(self._symdefs)

    def __contains__(self, cache_key: object) -> bool:
        return cache_key in self._symdefs
