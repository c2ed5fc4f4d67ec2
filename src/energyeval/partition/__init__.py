"""
Partition module.

Splits a flat system into ordered contiguous components and maps
particle indices to their owning component.
"""

from .component_partition import (
    component_boundaries,
    component_labels,
    component_of,
    component_ranges,
    split_components,
    validate_counts,
    validate_frozen_mask,
)

__all__ = [
    "component_boundaries",
    "component_labels",
    "component_of",
    "component_ranges",
    "split_components",
    "validate_counts",
    "validate_frozen_mask",
]
