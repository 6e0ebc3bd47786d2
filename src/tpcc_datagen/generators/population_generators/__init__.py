"""
Population generators package.

Re-exports PopulationGenerator and the result containers it returns.
"""

from .base_types import PopulationResult, WarehousePopulation
from .population_generator import PopulationGenerator

__all__ = ["PopulationGenerator", "PopulationResult", "WarehousePopulation"]
