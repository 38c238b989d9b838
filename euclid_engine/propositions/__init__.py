"""Authored Book I propositions."""

from __future__ import annotations

from typing import Dict, Optional

from ..types import PropositionDef
from .prop1 import PROP_1
from .prop2 import PROP_2
from .prop3 import PROP_3
from .prop4 import PROP_4
from .prop5 import PROP_5
from .prop6 import PROP_6
from .prop7 import PROP_7

PROP_REGISTRY: Dict[int, PropositionDef] = {
    prop.id: prop for prop in (PROP_1, PROP_2, PROP_3, PROP_4, PROP_5, PROP_6, PROP_7)
}


def get_proposition(prop_id: int) -> Optional[PropositionDef]:
    return PROP_REGISTRY.get(prop_id)


__all__ = [
    "PROP_1",
    "PROP_2",
    "PROP_3",
    "PROP_4",
    "PROP_5",
    "PROP_6",
    "PROP_7",
    "PROP_REGISTRY",
    "get_proposition",
]
