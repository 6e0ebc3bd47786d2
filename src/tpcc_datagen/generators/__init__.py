"""
Generators module for TPC-C population generation.

This module contains the random value primitives, the per-table builders and
the orchestrator that assembles a complete population.
"""

from .population_generators import PopulationGenerator
from .progress_tracker import TableProgressTracker
from .utils import LoadConstants, RandomValueGenerator, generate_c_last

__all__ = [
    "PopulationGenerator",
    "TableProgressTracker",
    "LoadConstants",
    "RandomValueGenerator",
    "generate_c_last",
]
