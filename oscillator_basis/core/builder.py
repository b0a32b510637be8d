"""
Orbital set construction from oscillator parameters and selection criteria.

``SHOBasisBuilder`` sizes the oscillator basis from the extrema of a
``SelectionCriteria``, generates the catalog and hands out ``OrbitalSet``
records holding the chosen states.

Example
-------
>>> from oscillator_basis.systems import HarmonicOscillator
>>> builder = SHOBasisBuilder(HarmonicOscillator(3, energy=0.5))
>>> criteria = SelectionCriteria(index_min=0, index_max=4)
>>> builder.initialize(criteria)
>>> orbitals = builder.create_from_criteria(criteria)
>>> orbitals.size
4
"""

from typing import List, Sequence, Tuple
import logging

import numpy as np

from ..systems.oscillator import HarmonicOscillator
from .errors import ConfigurationError, SelectionError
from .generator import SHOBasisGenerator
from .selection import OrbitalSelector, SelectionCriteria
from .shells import shell_for_energy, states_through_shell
from .states import BasisStateCollection, QuantumState

logger = logging.getLogger(__name__)


class OrbitalSet:
    """
    Read-only set of oscillator states chosen for an orbital set.

    Parameters
    ----------
    states : sequence of QuantumState
        Selected states in ascending global index order
    length : float
        Oscillator length
    center : np.ndarray
        Center of the oscillator potential
    """

    def __init__(self, states: Sequence[QuantumState], length: float, center: np.ndarray):
        self._states = tuple(states)
        self._length = length
        self._center = np.asarray(center, dtype=float).copy()

    @property
    def states(self) -> Tuple[QuantumState, ...]:
        return self._states

    @property
    def size(self) -> int:
        return len(self._states)

    @property
    def indices(self) -> List[int]:
        return [s.index for s in self._states]

    @property
    def energies(self) -> np.ndarray:
        return np.array([s.energy for s in self._states], dtype=float)

    @property
    def quantum_numbers(self) -> np.ndarray:
        return np.array([s.quantum_number for s in self._states], dtype=int)

    @property
    def length(self) -> float:
        return self._length

    @property
    def center(self) -> np.ndarray:
        return self._center.copy()

    def __len__(self) -> int:
        return len(self._states)

    def report(self, pad: str = "") -> str:
        lines = [f"{pad}OrbitalSet report",
                 f"{pad}  length    = {self._length}",
                 f"{pad}  center    = {self._center}",
                 f"{pad}  # states  = {len(self._states)}"]
        for state in self._states:
            lines.append(state.report(f"{pad}    "))
        lines.append(f"{pad}end OrbitalSet report")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"OrbitalSet(size={self.size}, length={self._length})"


class SHOBasisBuilder:
    """
    Builds oscillator orbital sets.

    Parameters
    ----------
    oscillator : HarmonicOscillator
        Physical parameters of the oscillator
    """

    def __init__(self, oscillator: HarmonicOscillator):
        self._oscillator = oscillator
        self._generator = SHOBasisGenerator(oscillator.dim, oscillator.energy)
        self._initialized = False

    @property
    def oscillator(self) -> HarmonicOscillator:
        return self._oscillator

    @property
    def generator(self) -> SHOBasisGenerator:
        return self._generator

    @property
    def states(self) -> BasisStateCollection:
        return self._generator.states

    @property
    def initialized(self) -> bool:
        return self._initialized

    def required_max_index(self, criteria: SelectionCriteria) -> int:
        """
        Highest catalog index the criteria can touch.

        Index requests contribute their highest index. Energy requests
        contribute the last index of the highest shell at or below the
        highest requested energy. Returns -1 if nothing is requested.
        """
        smax = -1
        if criteria.has_index_info:
            highest = criteria.highest_index
            if highest is not None:
                smax = max(smax, highest)
        if criteria.has_energy_info:
            highest = criteria.highest_energy
            if highest is not None and np.isfinite(highest):
                osc = self._oscillator
                nmax = shell_for_energy(highest, osc.energy, osc.dim)
                smax = max(smax, states_through_shell(nmax, osc.dim) - 1)
        return smax

    def initialize(self, criteria: SelectionCriteria) -> None:
        """
        Generate enough states to satisfy ``criteria``.

        Raises
        ------
        ConfigurationError
            If the criteria do not determine a basis size
        """
        smax = self.required_max_index(criteria)
        if smax < 0:
            raise ConfigurationError("SHOBasisBuilder.initialize: invalid basis size")
        logger.info("Initializing oscillator basis: dim=%d, max index=%d",
                    self._oscillator.dim, smax)
        self._generator.ensure_states(smax)
        self._initialized = True

    def create_from_size(self, size: int) -> OrbitalSet:
        """Orbital set made of the ``size`` lowest states."""
        if size <= 0:
            raise ConfigurationError("SHOBasisBuilder.create_from_size: size is zero")
        return self.create_from_indices(self._generator.select_prefix(size))

    def create_from_criteria(self, criteria: SelectionCriteria) -> OrbitalSet:
        """
        Orbital set chosen by ``criteria``.

        A bare size request (no index or energy requests) falls back to the
        lowest ``size`` states.
        """
        selector = OrbitalSelector(criteria)
        if criteria.has_size and not (selector.index_request or selector.energy_request):
            return self.create_from_size(criteria.size)
        self._check_initialized("create_from_criteria")
        indices = selector.get_indices(self.states)
        logger.debug("%s", selector.report("  "))
        return self.create_from_indices(indices)

    def create_from_indices(self, indices: Sequence[int]) -> OrbitalSet:
        """
        Orbital set made of the states with the given global indices.

        Raises
        ------
        ConfigurationError
            If the basis has not been initialized
        SelectionError
            If an index is not in the catalog
        """
        self._check_initialized("create_from_indices")
        n = len(self.states)
        chosen = []
        for i in indices:
            if not 0 <= i < n:
                raise SelectionError(
                    f"SHOBasisBuilder.create_from_indices: index {i} outside [0, {n})")
            chosen.append(self.states[i])
        osc = self._oscillator
        orbitals = OrbitalSet(chosen, osc.length, osc.center)
        logger.info("Created oscillator orbital set with %d states", orbitals.size)
        return orbitals

    def _check_initialized(self, where: str) -> None:
        if not self._initialized:
            raise ConfigurationError(
                f"SHOBasisBuilder.{where}: parameters have not been set")

    def report(self, pad: str = "") -> str:
        text = "\n".join([
            f"{pad}SHOBasisBuilder report",
            self._oscillator.report(pad + "  "),
            self._generator.report(pad + "  "),
            f"{pad}end SHOBasisBuilder report",
        ])
        return text
