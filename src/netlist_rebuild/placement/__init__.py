"""
Component placement: resolved device + grid position -> placed symbol.
"""

from .models import AttributeOutcome, PlacedComponent, PlacementFailure, ResolvedPin
from .placer import ComponentPlacer, apply_attributes, bounding_size

__all__ = [
    "ComponentPlacer",
    "PlacedComponent",
    "PlacementFailure",
    "ResolvedPin",
    "AttributeOutcome",
    "apply_attributes",
    "bounding_size",
]
