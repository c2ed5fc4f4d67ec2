"""
Unit tests for the pairwise summation primitives and executors.

Each reduction is checked against a brute-force double loop over
pbc_distance.
"""
import itertools
import math

import numpy as np
import pytest

from energyeval.boundary import pbc_distance
from energyeval.core import ParticleSystem
from energyeval.potential import CompositeLJParameters, LJParameters
from energyeval.summation import (
    SerialExecutor,
    ThreadedExecutor,
    inter_component_energy,
    intra_component_energy,
    single_site_sum,
    site_to_system_energy,
)


def brute_pair(system: ParticleSystem, params: LJParameters, i: int, j: int) -> float:
    """Reference pair energy from the scalar distance function."""
    r = pbc_distance(
        system.positions[i], system.positions[j],
        system.box_lengths, system.periodicity,
    )
    return params.pair_energy(r)


@pytest.fixture
def gas() -> ParticleSystem:
    """Twelve random particles in a 6 Å periodic cube."""
    rng = np.random.default_rng(42)
    return ParticleSystem(
        positions=rng.uniform(0.0, 6.0, size=(12, 3)),
        cell=np.eye(3) * 6.0,
        pbc=(True, True, True),
    )


@pytest.fixture
def lj() -> LJParameters:
    return LJParameters(epsilon=1.0, sigma=1.0)


class TestIntraComponent:
    """Tests for intra_component_energy."""

    def test_matches_brute_force(self, gas: ParticleSystem, lj: LJParameters) -> None:
        expected = sum(
            brute_pair(gas, lj, i, j)
            for i, j in itertools.combinations(range(gas.n_atoms), 2)
        )
        assert pytest.approx(intra_component_energy(gas, lj), rel=1e-9) == expected

    @pytest.mark.parametrize("n", [0, 1])
    def test_fewer_than_two_particles(self, lj: LJParameters, n: int) -> None:
        lonely = ParticleSystem(positions=np.zeros((n, 3)), cell=np.eye(3) * 5.0)
        assert intra_component_energy(lonely, lj) == 0.0

    def test_dimer_at_half_sigma(self, lj: LJParameters) -> None:
        dimer = ParticleSystem(
            positions=np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 9.5]]),
            cell=np.eye(3) * 10.0,
        )
        assert pytest.approx(intra_component_energy(dimer, lj)) == 4 * (2.0**12 - 2.0**6)


class TestInterComponent:
    """Tests for inter_component_energy."""

    def test_matches_brute_force(self, gas: ParticleSystem, lj: LJParameters) -> None:
        a, b = gas.subsystem(0, 5), gas.subsystem(5, 12)
        expected = sum(
            brute_pair(gas, lj, i, j) for i in range(5) for j in range(5, 12)
        )
        result = inter_component_energy(a, b, lj, boundary_from=gas)
        assert pytest.approx(result, rel=1e-9) == expected

    def test_symmetric(self, gas: ParticleSystem, lj: LJParameters) -> None:
        a, b = gas.subsystem(0, 4), gas.subsystem(4, 12)
        assert pytest.approx(inter_component_energy(a, b, lj)) == inter_component_energy(b, a, lj)

    def test_empty_component(self, gas: ParticleSystem, lj: LJParameters) -> None:
        assert inter_component_energy(gas.subsystem(0, 0), gas, lj) == 0.0

    def test_intra_plus_inter_is_whole(self, gas: ParticleSystem, lj: LJParameters) -> None:
        a, b = gas.subsystem(0, 7), gas.subsystem(7, 12)
        parts = (
            intra_component_energy(a, lj)
            + intra_component_energy(b, lj)
            + inter_component_energy(a, b, lj)
        )
        assert pytest.approx(parts, rel=1e-9) == intra_component_energy(gas, lj)


class TestSingleSite:
    """Tests for single_site_sum and site_to_system_energy."""

    def test_matches_brute_force(self, gas: ParticleSystem, lj: LJParameters) -> None:
        expected = sum(brute_pair(gas, lj, 3, j) for j in range(gas.n_atoms) if j != 3)
        assert pytest.approx(single_site_sum(3, gas, lj), rel=1e-9) == expected

    def test_sites_sum_to_twice_total(self, gas: ParticleSystem, lj: LJParameters) -> None:
        sites = math.fsum(single_site_sum(i, gas, lj) for i in range(gas.n_atoms))
        assert pytest.approx(sites / 2, rel=1e-9) == intra_component_energy(gas, lj)

    def test_composite_uses_component_pair(self, gas: ParticleSystem) -> None:
        aa = LJParameters(1.0, 1.0)
        ab = LJParameters(0.5, 1.2)
        bb = LJParameters(0.2, 0.9)
        ljs = CompositeLJParameters.from_upper_triangle(2, [aa, ab, bb])
        counts = [4, 8]
        expected = sum(brute_pair(gas, aa, 1, j) for j in range(4) if j != 1)
        expected += sum(brute_pair(gas, ab, 1, j) for j in range(4, 12))
        result = single_site_sum(1, gas, ljs, counts=counts)
        assert pytest.approx(result, rel=1e-9) == expected

    def test_out_of_range(self, gas: ParticleSystem, lj: LJParameters) -> None:
        with pytest.raises(IndexError):
            single_site_sum(12, gas, lj)

    def test_single_particle(self, lj: LJParameters) -> None:
        lonely = ParticleSystem(positions=np.zeros((1, 3)), cell=np.eye(3))
        assert single_site_sum(0, lonely, lj) == 0.0

    def test_site_to_system(self, gas: ParticleSystem, lj: LJParameters) -> None:
        surface = gas.subsystem(6, 12)
        expected = sum(brute_pair(gas, lj, 0, j) for j in range(6, 12))
        result = site_to_system_energy(gas.positions[0], surface, lj, boundary_from=gas)
        assert pytest.approx(result, rel=1e-9) == expected


class TestExecutors:
    """Serial and threaded reductions must agree."""

    def test_chunks_cover_range(self) -> None:
        assert SerialExecutor(chunk_size=4).chunks(10) == [(0, 4), (4, 8), (8, 10)]
        assert SerialExecutor(chunk_size=4).chunks(0) == []

    def test_map_reduce_empty(self) -> None:
        assert SerialExecutor().map_reduce(lambda start, stop: 1.0, 0) == 0.0

    @pytest.mark.parametrize("chunk_size", [1, 3, 7, 4096])
    def test_threaded_matches_serial(
        self, gas: ParticleSystem, lj: LJParameters, chunk_size: int
    ) -> None:
        serial = SerialExecutor(chunk_size=chunk_size)
        threaded = ThreadedExecutor(max_workers=4, chunk_size=chunk_size)
        assert intra_component_energy(gas, lj, threaded) == pytest.approx(
            intra_component_energy(gas, lj, serial), rel=1e-9
        )
        a, b = gas.subsystem(0, 5), gas.subsystem(5, 12)
        assert inter_component_energy(a, b, lj, threaded) == pytest.approx(
            inter_component_energy(a, b, lj, serial), rel=1e-9
        )
        assert single_site_sum(2, gas, lj, threaded) == pytest.approx(
            single_site_sum(2, gas, lj, serial), rel=1e-9
        )

    def test_chunking_does_not_change_result(
        self, gas: ParticleSystem, lj: LJParameters
    ) -> None:
        coarse = intra_component_energy(gas, lj, SerialExecutor(chunk_size=4096))
        fine = intra_component_energy(gas, lj, SerialExecutor(chunk_size=1))
        assert pytest.approx(fine, rel=1e-9) == coarse

    @pytest.mark.parametrize("factory", [
        lambda: SerialExecutor(chunk_size=0),
        lambda: ThreadedExecutor(chunk_size=-1),
        lambda: ThreadedExecutor(max_workers=0),
    ])
    def test_invalid_settings(self, factory) -> None:
        with pytest.raises(ValueError):
            factory()
