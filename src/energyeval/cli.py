"""
Command line front end.

Reads a structure with ``ase.io.read``, builds the evaluator from a
YAML config and prints the frozen, interacting and total energies.
"""
import argparse
import logging
from typing import List, Optional

from ase.io import read

from energyeval.builder import (
    build_evaluator_from_config,
    load_yaml,
    parse_components,
)
from energyeval.core import EnergyEvalError, EnergyReport, as_system

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="energyeval",
        description="Frozen / interacting energy decomposition of a structure",
    )
    parser.add_argument("structure", help="Structure file readable by ase.io.read")
    parser.add_argument("-c", "--config", help="YAML configuration file")
    parser.add_argument(
        "-i",
        "--index",
        type=int,
        action="append",
        help="Also report the single-site energy of this particle (repeatable)",
    )
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        help="Worker threads for pair sums (overrides parallel.workers)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def compute_report(
    structure: str,
    config: dict,
    indices: Optional[List[int]] = None,
) -> EnergyReport:
    """
    Evaluate all energies for one structure file.

    Args:
        structure: Path to a structure file.
        config: Configuration dictionary.
        indices: Particles whose single-site energy is wanted.

    Returns:
        EnergyReport.
    """
    system = as_system(read(structure))
    evaluator = build_evaluator_from_config(config)
    counts, frozen = parse_components(config, n_atoms=system.n_atoms)

    e_frozen = evaluator.frozen_energy(system, counts, frozen)
    e_interacting = evaluator.interacting_energy(system, counts, frozen)
    single_site = None
    if indices:
        single_site = {
            i: evaluator.single_site_energy(i, system, counts) for i in indices
        }
    return EnergyReport(
        n_atoms=system.n_atoms,
        potential=evaluator.potential.get_name(),
        frozen=e_frozen,
        interacting=e_interacting,
        total=e_frozen + e_interacting,
        counts=counts,
        frozen_mask=frozen,
        single_site=single_site,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    config = load_yaml(args.config) if args.config else {}
    if args.workers is not None:
        config.setdefault("parallel", {})["workers"] = args.workers

    try:
        report = compute_report(args.structure, config, args.index)
    except (EnergyEvalError, IndexError, ValueError) as exc:
        logger.error(str(exc))
        return 1

    print(f"Structure:   {args.structure} ({report.n_atoms} particles)")
    print(f"Potential:   {report.potential}")
    print(f"Components:  {report.counts} frozen={report.frozen_mask}")
    print(f"Frozen:      {report.frozen:.10f} eV")
    print(f"Interacting: {report.interacting:.10f} eV")
    print(f"Total:       {report.total:.10f} eV")
    for i, energy in (report.single_site or {}).items():
        print(f"Site {i}:      {energy:.10f} eV")
    return 0
