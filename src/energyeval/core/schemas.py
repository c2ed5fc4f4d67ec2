"""
Configuration schemas.

Plain dataclasses describing an energy evaluation setup, shared by the
YAML loader and the command line. Each section stays a dictionary so
that the loader owns the parsing rules.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class EnergyConfig:
    """Everything needed to build an EnergyEvaluator and a partition."""

    potential: Dict[str, Any] = field(default_factory=lambda: {"type": "lj"})
    components: Dict[str, Any] = field(default_factory=dict)
    parallel: Dict[str, Any] = field(default_factory=lambda: {"workers": 1})

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "EnergyConfig":
        d = d or {}
        return cls(
            potential=d.get("potential", {"type": "lj"}),
            components=d.get("components", {}),
            parallel=d.get("parallel", {"workers": 1}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "potential": self.potential,
            "components": self.components,
            "parallel": self.parallel,
        }


@dataclass
class EnergyReport:
    """Energies computed for one configuration."""

    n_atoms: int
    potential: str
    frozen: float
    interacting: float
    total: float
    counts: List[int]
    frozen_mask: List[bool]
    single_site: Optional[Dict[int, float]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_atoms": self.n_atoms,
            "potential": self.potential,
            "frozen": self.frozen,
            "interacting": self.interacting,
            "total": self.total,
            "counts": self.counts,
            "frozen_mask": self.frozen_mask,
            "single_site": self.single_site,
        }
