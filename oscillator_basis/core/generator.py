"""
Harmonic oscillator basis state generator.

Enumerates eigenstates of a D-dimensional isotropic harmonic oscillator into
an energy-ordered ``BasisStateCollection``. The catalog only grows: repeated
calls with larger targets overwrite existing records in place and append the
rest, and every call refreshes energies from the current energy quantum.

Example
-------
>>> gen = SHOBasisGenerator(dim=2, energy_quantum=0.5)
>>> gen.ensure_states(5)
>>> len(gen.states)
6
>>> gen.select_prefix(3)
[0, 1, 2]
"""

from typing import List, Optional, Tuple
import logging

import numpy as np

from .errors import SizingError
from .shells import check_dimension, shell_for_count
from .states import BasisStateCollection, DEFAULT_ENERGY_TOL

logger = logging.getLogger(__name__)


class SHOBasisGenerator:
    """
    Builds and extends the catalog of oscillator eigenstates.

    Parameters
    ----------
    dim : int
        Number of spatial dimensions (1, 2 or 3)
    energy_quantum : float
        Oscillator energy scale hbar*omega, in Hartree
    tol : float
        Tolerance used when sorting degenerate energies

    Raises
    ------
    ConfigurationError
        If ``dim`` is not 1, 2 or 3
    """

    def __init__(self, dim: int, energy_quantum: float = 1.0,
                 tol: float = DEFAULT_ENERGY_TOL):
        check_dimension(dim, "SHOBasisGenerator")
        self._dim = int(dim)
        self._energy_quantum = float(energy_quantum)
        self._tol = tol
        self._states = BasisStateCollection()
        self._nmax: Optional[int] = None
        self._strides: Optional[Tuple[int, ...]] = None

    @property
    def dim(self) -> int:
        return self._dim

    @property
    def energy_quantum(self) -> float:
        """Oscillator energy scale; changes take effect on the next ``ensure_states``."""
        return self._energy_quantum

    @energy_quantum.setter
    def energy_quantum(self, value: float):
        self._energy_quantum = float(value)

    @property
    def states(self) -> BasisStateCollection:
        """The energy-ordered catalog (read-only by convention)."""
        return self._states

    @property
    def nmax(self) -> Optional[int]:
        """Highest principal number enumerated by the last growth pass."""
        return self._nmax

    @property
    def strides(self) -> Optional[Tuple[int, ...]]:
        """Mixed-radix strides used by the last growth pass."""
        return self._strides

    def state_energy(self, principal_number: int) -> float:
        """Energy of a shell: energy_quantum * (n + D/2)."""
        return self._energy_quantum * (principal_number + 0.5 * self._dim)

    def ensure_states(self, min_count: int) -> None:
        """
        Make sure the catalog holds more than ``min_count`` states.

        Parameters
        ----------
        min_count : int
            Highest index that must exist after the call

        Raises
        ------
        SizingError
            If the closed-form shell estimate produced too few states
        """
        states_required = min_count - len(self._states) + 1
        if states_required > 0:
            self._enumerate(shell_for_count(min_count + 1, self._dim))

        # the energy scale may have changed even if nothing was added
        for slot, state in enumerate(self._states):
            self._states.set_energy(slot, self.state_energy(state.principal_number))
        if len(self._states) > 0:
            self._states.energy_sort(self._tol)

        if len(self._states) <= min_count:
            raise SizingError(
                f"SHOBasisGenerator.ensure_states: failed to make enough states "
                f"(have {len(self._states)}, need {min_count + 1})")

    def _enumerate(self, nmax: int) -> None:
        dim = self._dim
        ndim = nmax + 1
        strides = [1] * dim
        for d in range(dim - 2, -1, -1):
            strides[d] = strides[d + 1] * ndim
        self._nmax = nmax
        self._strides = tuple(strides)

        qnumber = [0] * dim
        s = 0
        for m in range(ndim ** dim):
            n = 0
            nrem = m
            for d in range(dim):
                i = nrem // strides[d]
                nrem -= i * strides[d]
                qnumber[d] = i
                n += i
            if n <= nmax:
                self._states.assign(s, qnumber, self.state_energy(n))
                s += 1

        logger.debug("Enumerated %d states up to shell nmax=%d (dim=%d)", s, nmax, dim)

    def select_prefix(self, count: int) -> List[int]:
        """
        Return the first ``count`` global indices in energy order.

        Raises
        ------
        SizingError
            If the catalog is empty or holds fewer than ``count`` states
        """
        if len(self._states) == 0:
            raise SizingError("SHOBasisGenerator.select_prefix: size is zero")
        if count > len(self._states):
            raise SizingError(
                f"SHOBasisGenerator.select_prefix: {count} states requested but only "
                f"{len(self._states)} generated")
        return [self._states[s].index for s in range(count)]

    def quantum_numbers(self) -> np.ndarray:
        """Quantum numbers of the catalog in energy order, shape (n_states, dim)."""
        return self._states.quantum_numbers

    def report(self, pad: str = "") -> str:
        """Human-readable dump of the generator state, also sent to the log."""
        lines = [
            f"{pad}SHOBasisGenerator report",
            f"{pad}  dimension      = {self._dim}",
            f"{pad}  energy         = {self._energy_quantum}",
            f"{pad}  nmax           = {self._nmax}",
            f"{pad}  strides        = {self._strides}",
            f"{pad}  # basis states = {len(self._states)}",
            f"{pad}  basis_states",
        ]
        for s, state in enumerate(self._states):
            lines.append(state.report(f"{pad}    {s} "))
        lines.append(f"{pad}end SHOBasisGenerator report")
        text = "\n".join(lines)
        logger.info("%s", text)
        return text

    def __repr__(self) -> str:
        return (f"SHOBasisGenerator(dim={self._dim}, energy_quantum={self._energy_quantum}, "
                f"n_states={len(self._states)})")
