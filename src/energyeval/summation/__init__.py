"""
Summation module.

Pairwise reduction primitives and the executors that run them:
- intra_component_energy / inter_component_energy / single_site_sum
- SerialExecutor, ThreadedExecutor
"""

from .executor import PairExecutor, SerialExecutor, ThreadedExecutor
from .pairwise import (
    inter_component_energy,
    intra_component_energy,
    single_site_sum,
    site_to_system_energy,
)

__all__ = [
    "PairExecutor",
    "SerialExecutor",
    "ThreadedExecutor",
    "intra_component_energy",
    "inter_component_energy",
    "single_site_sum",
    "site_to_system_energy",
]
