"""
Unit tests for builder module.
"""
import math
from pathlib import Path

import numpy as np
import pytest

from energyeval.builder import (
    build_evaluator_from_config,
    load_yaml,
    parse_components,
    parse_executor,
    parse_potential,
)
from energyeval.core import ConfigurationMismatch, EnergyConfig, ParticleSystem
from energyeval.potential import ASECalculator, CompositeLJParameters, LJParameters
from energyeval.summation import SerialExecutor, ThreadedExecutor

COMPOSITE_YAML = """
potential:
  type: composite
  n_components: 2
  pairs:
    - {epsilon: 1.0, sigma: 1.0}
    - {epsilon: 0.5, sigma: 1.1, cutoff: 2.5, shift: true}
    - {epsilon: 0.2, sigma: 1.2}
components:
  counts: [1, 2]
  frozen: [true, false]
parallel:
  workers: 4
  chunk_size: 16
"""


class TestLoadYaml:
    """Tests for YAML loading."""

    def test_load_composite(self, tmp_path: Path) -> None:
        path = tmp_path / "energy.yaml"
        path.write_text(COMPOSITE_YAML)
        config = load_yaml(path)
        assert config["potential"]["type"] == "composite"
        assert config["components"]["counts"] == [1, 2]

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml(path) == {}


class TestParsePotential:
    """Tests for potential parsing."""

    def test_default_is_lj(self) -> None:
        pot = parse_potential({})
        assert pot == LJParameters(1.0, 1.0)
        assert math.isinf(pot.cutoff)

    def test_lj_with_cutoff(self) -> None:
        pot = parse_potential({"potential": {
            "type": "lennard_jones", "epsilon": 0.0104, "sigma": 3.4,
            "cutoff": 2.5, "shift": True,
        }})
        assert isinstance(pot, LJParameters)
        assert pot.cutoff_radius == pytest.approx(8.5)
        assert pot.shift

    def test_composite(self, tmp_path: Path) -> None:
        path = tmp_path / "energy.yaml"
        path.write_text(COMPOSITE_YAML)
        pot = parse_potential(load_yaml(path))
        assert isinstance(pot, CompositeLJParameters)
        assert pot.params_for(1, 0) == LJParameters(0.5, 1.1, cutoff=2.5, shift=True)

    def test_composite_wrong_pair_count(self) -> None:
        config = {"potential": {
            "type": "composite", "n_components": 3,
            "pairs": [{"epsilon": 1.0, "sigma": 1.0}],
        }}
        with pytest.raises(ConfigurationMismatch):
            parse_potential(config)

    def test_ase_lj(self) -> None:
        pot = parse_potential({"potential": {"type": "ase_lj", "sigma": 2.0}})
        assert isinstance(pot, ASECalculator)
        assert pot.calc.parameters.rc == pytest.approx(6.0)

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown potential"):
            parse_potential({"potential": {"type": "morse"}})


class TestParseComponents:
    """Tests for component parsing."""

    def test_explicit(self) -> None:
        counts, frozen = parse_components(
            {"components": {"counts": [2, 3, 1], "frozen": [True, False, True]}}
        )
        assert counts == [2, 3, 1]
        assert frozen == [True, False, True]

    def test_defaults_to_single_free_component(self) -> None:
        assert parse_components({}, n_atoms=7) == ([7], [False])

    def test_counts_needed_without_atom_count(self) -> None:
        with pytest.raises(ValueError):
            parse_components({})

    def test_quoted_frozen_flag_rejected(self, tmp_path: Path) -> None:
        """A quoted "false" must not silently freeze a component."""
        path = tmp_path / "quoted.yaml"
        path.write_text(
            "components:\n"
            "  counts: [1, 2]\n"
            "  frozen: [\"false\", true]\n"
        )
        with pytest.raises(ConfigurationMismatch, match="component 0 must be a boolean"):
            parse_components(load_yaml(path))


class TestBuildEvaluator:
    """Tests for evaluator construction."""

    def test_executor_selection(self) -> None:
        assert isinstance(parse_executor({}), SerialExecutor)
        threaded = parse_executor({"parallel": {"workers": 3, "chunk_size": 8}})
        assert isinstance(threaded, ThreadedExecutor)
        assert threaded.max_workers == 3
        assert threaded.chunk_size == 8

    def test_from_energy_config(self) -> None:
        config = EnergyConfig.from_dict({"potential": {"type": "lj", "sigma": 2.0}})
        evaluator = build_evaluator_from_config(config)
        assert evaluator.potential == LJParameters(1.0, 2.0)
        assert isinstance(evaluator.executor, SerialExecutor)

    def test_configured_evaluator_runs(self, tmp_path: Path) -> None:
        path = tmp_path / "energy.yaml"
        path.write_text(COMPOSITE_YAML)
        config = load_yaml(path)
        evaluator = build_evaluator_from_config(config)
        system = ParticleSystem(
            positions=np.array([[0.0, 0.0, 0.0], [1.2, 0.0, 0.0], [0.0, 1.3, 0.0]]),
            cell=np.eye(3) * 10.0,
        )
        counts, frozen = parse_components(config, system.n_atoms)
        split = evaluator.frozen_energy(system, counts, frozen) + evaluator.interacting_energy(
            system, counts, frozen
        )
        assert split == pytest.approx(evaluator.total_energy(system, counts))
