"""
Unit tests for potential module.

Tests for LJParameters, CompositeLJParameters and the ASE backend.
"""
import math
import warnings

import numpy as np
import pytest
from ase.calculators.calculator import Calculator, all_changes
from ase.calculators.lj import LennardJones

from energyeval.core import BackendFailure, ConfigurationMismatch, ParticleSystem
from energyeval.potential import (
    ASECalculator,
    CompositeLJParameters,
    ExternalPotential,
    LJParameters,
    PairPotential,
    PotentialEnergy,
    ase_lennard_jones,
)


class TestLJParameters:
    """Tests for LJParameters."""

    @pytest.fixture
    def lj(self) -> LJParameters:
        """Standard LJ parameters without cutoff."""
        return LJParameters(epsilon=1.0, sigma=1.0)

    def test_pair_energy_at_sigma(self, lj: LJParameters) -> None:
        """At r=sigma, U(r) = 0."""
        assert lj.pair_energy(1.0) == 0.0

    def test_pair_energy_at_minimum(self, lj: LJParameters) -> None:
        """At r=2^(1/6)*sigma, U(r) = -epsilon."""
        lj2 = LJParameters(epsilon=0.7, sigma=3.4)
        r_min = 2 ** (1 / 6) * 3.4
        assert pytest.approx(lj2.pair_energy(r_min), abs=1e-12) == -0.7
        assert pytest.approx(lj.pair_energy(2 ** (1 / 6)), abs=1e-12) == -1.0

    def test_pair_energy_half_sigma(self, lj: LJParameters) -> None:
        """Strongly repulsive at r = sigma/2."""
        expected = 4 * ((1 / 0.5) ** 12 - (1 / 0.5) ** 6)
        assert pytest.approx(lj.pair_energy(0.5)) == expected

    def test_no_cutoff_by_default(self, lj: LJParameters) -> None:
        """Without a cutoff, distant pairs keep their (tiny) attraction."""
        assert math.isinf(lj.cutoff)
        assert lj.pair_energy(50.0) < 0.0

    def test_vectorised(self, lj: LJParameters) -> None:
        r = np.array([1.0, 2 ** (1 / 6), 2.0])
        energies = lj.pair_energy(r)
        assert isinstance(energies, np.ndarray)
        np.testing.assert_allclose(
            energies, [0.0, -1.0, 4 * (2.0**-12 - 2.0**-6)], atol=1e-12
        )

    def test_scalar_returns_float(self, lj: LJParameters) -> None:
        assert isinstance(lj.pair_energy(1.5), float)

    def test_coincident_particles_are_nan(self, lj: LJParameters) -> None:
        """r = 0 is undefined and must not emit floating point warnings."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert math.isnan(lj.pair_energy(0.0))
            energies = lj.pair_energy(np.array([0.0, 1.0]))
        assert np.isnan(energies[0])
        assert energies[1] == 0.0

    def test_cutoff_truncates(self) -> None:
        """Beyond cutoff * sigma the energy is zero."""
        lj = LJParameters(epsilon=1.0, sigma=2.0, cutoff=2.5)
        assert lj.cutoff_radius == 5.0
        assert lj.pair_energy(5.1) == 0.0
        assert lj.pair_energy(4.9) < 0.0

    def test_shifted_energy_continuous_at_cutoff(self) -> None:
        lj = LJParameters(epsilon=1.0, sigma=1.0, cutoff=2.5, shift=True)
        assert abs(lj.pair_energy(2.5)) < 1e-12
        unshifted = LJParameters(epsilon=1.0, sigma=1.0, cutoff=2.5)
        assert lj.pair_energy(1.2) > unshifted.pair_energy(1.2)

    @pytest.mark.parametrize("kwargs", [
        {"epsilon": -1.0, "sigma": 1.0},
        {"epsilon": 1.0, "sigma": 0.0},
        {"epsilon": 1.0, "sigma": 1.0, "cutoff": 0.0},
    ])
    def test_invalid_parameters(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            LJParameters(**kwargs)

    def test_params_for_any_pair(self, lj: LJParameters) -> None:
        assert lj.params_for(0, 5) is lj
        lj.check_components(17)

    def test_equality(self) -> None:
        assert LJParameters(1.0, 1.0) == LJParameters(1.0, 1.0)
        assert LJParameters(1.0, 1.0) != LJParameters(1.0, 1.1)


class TestCompositeLJParameters:
    """Tests for CompositeLJParameters."""

    @pytest.fixture
    def params(self) -> list:
        return [
            LJParameters(1.0, 1.0),
            LJParameters(0.5, 1.2),
            LJParameters(0.2, 1.5),
        ]

    def test_from_upper_triangle(self, params: list) -> None:
        ljs = CompositeLJParameters.from_upper_triangle(2, params)
        assert ljs.n_components == 2
        assert ljs.params_for(0, 0) is params[0]
        assert ljs.params_for(0, 1) is params[1]
        assert ljs.params_for(1, 0) is params[1]
        assert ljs.params_for(1, 1) is params[2]

    def test_pair_energy_between(self, params: list) -> None:
        ljs = CompositeLJParameters.from_upper_triangle(2, params)
        r = 1.3
        assert ljs.pair_energy_between(1, 0, r) == params[1].pair_energy(r)

    def test_pair_energy_needs_components(self, params: list) -> None:
        ljs = CompositeLJParameters.from_upper_triangle(2, params)
        with pytest.raises(TypeError):
            ljs.pair_energy(1.0)

    def test_wrong_triangle_length(self, params: list) -> None:
        with pytest.raises(ConfigurationMismatch):
            CompositeLJParameters.from_upper_triangle(3, params)

    def test_non_square_matrix(self, params: list) -> None:
        with pytest.raises(ConfigurationMismatch):
            CompositeLJParameters([[params[0], params[1]], [params[1]]])

    def test_asymmetric_matrix(self, params: list) -> None:
        with pytest.raises(ConfigurationMismatch, match="symmetric"):
            CompositeLJParameters(
                [[params[0], params[1]], [params[2], params[0]]]
            )

    def test_non_lj_entry(self, params: list) -> None:
        with pytest.raises(ConfigurationMismatch):
            CompositeLJParameters([[params[0], 1.0], [1.0, params[0]]])

    def test_check_components(self, params: list) -> None:
        ljs = CompositeLJParameters.from_upper_triangle(2, params)
        ljs.check_components(2)
        with pytest.raises(ConfigurationMismatch, match="dimension"):
            ljs.check_components(3)
        assert ljs.requires_components


class FailingCalculator(Calculator):
    """Calculator that always raises."""

    implemented_properties = ["energy"]

    def calculate(self, atoms=None, properties=["energy"], system_changes=all_changes):
        raise RuntimeError("backend exploded")


class NaNCalculator(Calculator):
    """Calculator that returns NaN."""

    implemented_properties = ["energy"]

    def calculate(self, atoms=None, properties=["energy"], system_changes=all_changes):
        super().calculate(atoms, properties, system_changes)
        self.results = {"energy": float("nan")}


class TestASECalculator:
    """Tests for the ASE backend."""

    @pytest.fixture
    def dimer(self) -> ParticleSystem:
        return ParticleSystem(
            positions=np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 1.2]]),
            cell=np.eye(3) * 20.0,
            pbc=(False, False, False),
            symbols=["Ar", "Ar"],
        )

    def test_total_energy_matches_ase(self, dimer: ParticleSystem) -> None:
        calc = LennardJones(epsilon=1.0, sigma=1.0, rc=3.0)
        pot = ASECalculator(calc)
        atoms = dimer.to_ase()
        atoms.calc = LennardJones(epsilon=1.0, sigma=1.0, rc=3.0)
        assert pytest.approx(pot.total_energy(dimer)) == atoms.get_potential_energy()

    def test_ase_lennard_jones_factory(self) -> None:
        pot = ase_lennard_jones(epsilon=0.5, sigma=2.0, cutoff=2.5)
        assert isinstance(pot, ASECalculator)
        assert pot.calc.parameters.rc == 5.0

    def test_ase_lennard_jones_needs_finite_cutoff(self) -> None:
        with pytest.raises(ValueError):
            ase_lennard_jones(cutoff=math.inf)

    def test_failure_is_wrapped(self, dimer: ParticleSystem) -> None:
        pot = ASECalculator(FailingCalculator())
        with pytest.raises(BackendFailure, match="backend exploded") as info:
            pot.total_energy(dimer)
        assert isinstance(info.value.__cause__, RuntimeError)

    def test_non_finite_result(self, dimer: ParticleSystem) -> None:
        with pytest.raises(BackendFailure, match="non-finite"):
            ASECalculator(NaNCalculator()).total_energy(dimer)


class TestPotentialInterface:
    """Test all potentials implement the interface."""

    def test_hierarchy(self) -> None:
        lj = LJParameters(1.0, 1.0)
        ljs = CompositeLJParameters([[lj]])
        ase_pot = ASECalculator(LennardJones())
        assert isinstance(lj, PairPotential)
        assert isinstance(ljs, PairPotential)
        assert isinstance(ase_pot, ExternalPotential)
        for pot in (lj, ljs, ase_pot):
            assert isinstance(pot, PotentialEnergy)
            assert isinstance(pot.get_name(), str)
