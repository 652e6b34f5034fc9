"""
Query techniques.
All techniques are auto-registered via decorators.
"""

from .base import TECHNIQUE_REGISTRY, Technique, get_technique, register_technique

# Import all techniques to trigger registration
from .composite_key import CompositeKeyTechnique, make_composite_key
from .join import JoinTechnique
from .reference import ReferenceTechnique

__all__ = [
    "Technique",
    "get_technique",
    "register_technique",
    "TECHNIQUE_REGISTRY",
    "CompositeKeyTechnique",
    "JoinTechnique",
    "ReferenceTechnique",
    "make_composite_key",
]
