"""Pairwise potentials."""

from .lennard_jones import LJParameters

__all__ = ["LJParameters"]
