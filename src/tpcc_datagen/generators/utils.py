"""
Utility classes and functions for population generation.

This module provides the primitive random-value generators every entity
builder is composed from: inclusive uniform integers, bounded a-strings and
n-strings, the ORIGINAL marker builder, NURand and the customer surname
syllable mapping (TPC-C clauses 2.1.6, 4.3.2 and 4.3.3).
"""

import logging
import random

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from tpcc_datagen.shared.constants import (
    ALPHANUMERIC,
    C_LAST_SYLLABLES,
    MAX_C_LAST_NUMBER,
    MAX_MARKER_REPAIRS,
    NUMERIC,
    NURAND_A_C_ID,
    NURAND_A_C_LAST,
    NURAND_A_OL_I_ID,
    ORIGINAL_STRING,
    ZIP_PREFIX_LENGTH,
    ZIP_SUFFIX,
)
from tpcc_datagen.shared.exceptions import ConfigurationError, InvariantViolationError

logger = logging.getLogger(__name__)


def generate_c_last(number: int) -> str:
    """
    Build a customer last name from a number in [0, 999] (clause 4.3.2.3).

    The hundreds, tens and units digits each select one syllable, so there
    are exactly 1000 distinct names.
    """
    if not 0 <= number <= MAX_C_LAST_NUMBER:
        raise ValueError(f"C_LAST number must be in [0, 999], got {number}")

    hundreds, rest = divmod(number, 100)
    tens, units = divmod(rest, 10)
    return (
        C_LAST_SYLLABLES[hundreds] + C_LAST_SYLLABLES[tens] + C_LAST_SYLLABLES[units]
    )


class RandomValueGenerator:
    """Seedable source of the benchmark's primitive random values.

    Each worker owns one instance; instances are not shared between threads.
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility (None uses OS entropy)
            rng: Pre-built random source; takes precedence over ``seed``
        """
        self.seed = seed
        self._rng = rng if rng is not None else random.Random(seed)
        # Permutations come from numpy; seed it from the python source so a
        # single seed drives both
        self._np_rng = np.random.default_rng(self._rng.getrandbits(64))

    def uniform(self, a: int, b: int) -> int:
        """Return an integer uniformly distributed in [a, b], both inclusive."""
        if a > b:
            raise ConfigurationError(
                "Lower bound exceeds upper bound", parameter="uniform", invalid_value=(a, b)
            )
        return self._rng.randint(a, b)

    def one_in(self, n: int) -> bool:
        """True with probability 1/n."""
        return self.uniform(1, n) == 1

    def _check_length_bounds(self, len_min: int, len_max: int) -> None:
        if len_min < 0 or len_min > len_max:
            raise ConfigurationError(
                "Invalid string length bounds",
                parameter="length",
                invalid_value=(len_min, len_max),
            )

    def a_string(self, len_min: int, len_max: int) -> str:
        """Random alphanumeric string with length uniform in [len_min, len_max]."""
        self._check_length_bounds(len_min, len_max)
        length = self.uniform(len_min, len_max)
        return "".join(self._rng.choices(ALPHANUMERIC, k=length))

    def n_string(self, len_min: int, len_max: int) -> str:
        """Random digit string with length uniform in [len_min, len_max]."""
        self._check_length_bounds(len_min, len_max)
        length = self.uniform(len_min, len_max)
        return "".join(self._rng.choices(NUMERIC, k=length))

    def zip_code(self) -> str:
        """Four random digits followed by '11111' (clause 4.3.2.7)."""
        return self.n_string(ZIP_PREFIX_LENGTH, ZIP_PREFIX_LENGTH) + ZIP_SUFFIX

    def original_a_string(
        self, len_min: int, len_max: int, contains_original: bool
    ) -> str:
        """
        Random a-string that contains 'ORIGINAL' exactly when requested.

        Accidental occurrences in the base string are overwritten with fresh
        8-character strings before the marker is placed. The length of the
        result equals the length of the base string.

        Raises:
            ConfigurationError: If the marker cannot fit in the minimum length
            InvariantViolationError: If accidental markers survive repair
        """
        marker_length = len(ORIGINAL_STRING)
        if contains_original and len_min < marker_length:
            raise ConfigurationError(
                "Minimum length too short to hold the ORIGINAL marker",
                parameter="len_min",
                invalid_value=len_min,
            )

        value = self.a_string(len_min, len_max)

        repairs = 0
        position = value.find(ORIGINAL_STRING)
        while position != -1:
            if repairs >= MAX_MARKER_REPAIRS:
                raise InvariantViolationError(
                    "Could not remove accidental ORIGINAL marker",
                    {"repairs": repairs, "value": value},
                )
            replacement = self.a_string(marker_length, marker_length)
            value = value[:position] + replacement + value[position + marker_length :]
            repairs += 1
            position = value.find(ORIGINAL_STRING)

        if contains_original:
            start = self.uniform(0, len(value) - marker_length)
            value = value[:start] + ORIGINAL_STRING + value[start + marker_length :]

        return value

    def nurand(self, a: int, x: int, y: int, c: int) -> int:
        """NURand(A, x, y) = (((random(0, A) | random(x, y)) + C) % (y - x + 1)) + x."""
        return (((self.uniform(0, a) | self.uniform(x, y)) + c) % (y - x + 1)) + x

    def skewed_surname_index(self, load_constant: int) -> int:
        """Non-uniform C_LAST number in [0, 999] for the run's load constant."""
        return self.nurand(NURAND_A_C_LAST, 0, MAX_C_LAST_NUMBER, load_constant)

    def permutation(self, n: int) -> list[int]:
        """Shuffled list of the integers 1..n."""
        if n <= 0:
            raise ConfigurationError(
                "Permutation size must be positive", parameter="n", invalid_value=n
            )
        return (self._np_rng.permutation(n) + 1).tolist()


def spawn_seeds(seed: int | None, count: int) -> list[int]:
    """
    Derive independent child seeds from one run seed.

    Children depend only on ``seed`` and their position, so each warehouse
    draws the same values whichever worker thread builds it.
    """
    children = np.random.SeedSequence(seed).spawn(count)
    return [int(child.generate_state(1)[0]) for child in children]


class LoadConstants(BaseModel):
    """NURand C constants drawn once per population run (clause 2.1.6)."""

    model_config = ConfigDict(frozen=True)

    c_last: int = Field(..., ge=0, le=NURAND_A_C_LAST)
    c_id: int = Field(..., ge=0, le=NURAND_A_C_ID)
    ol_i_id: int = Field(..., ge=0, le=NURAND_A_OL_I_ID)

    @classmethod
    def generate(cls, random_values: RandomValueGenerator) -> "LoadConstants":
        constants = cls(
            c_last=random_values.uniform(0, NURAND_A_C_LAST),
            c_id=random_values.uniform(0, NURAND_A_C_ID),
            ol_i_id=random_values.uniform(0, NURAND_A_OL_I_ID),
        )
        logger.debug(f"Drew load constants: {constants}")
        return constants
