"""
Quantum state records and the energy-ordered state catalog.

A catalog is an arena of immutable ``QuantumState`` records addressed by
position. Updating a state means overwriting the record at its position;
growing the catalog appends new records. After ``energy_sort`` every
record's ``index`` equals its position in energy order.
"""

from functools import cmp_to_key
from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import ConfigurationError

DEFAULT_ENERGY_TOL = 1e-6


class QuantumState(NamedTuple):
    """
    A single oscillator eigenstate.

    Parameters
    ----------
    quantum_number : tuple of int
        Per-axis non-negative quantum numbers
    energy : float, optional
        Eigenvalue in Hartree (None if not assigned)
    index : int, optional
        Global index, i.e. position in the energy-sorted catalog
    """

    quantum_number: Tuple[int, ...]
    energy: Optional[float] = None
    index: Optional[int] = None

    @property
    def dim(self) -> int:
        """Number of spatial dimensions."""
        return len(self.quantum_number)

    @property
    def principal_number(self) -> int:
        """Sum of the per-axis quantum numbers."""
        return sum(self.quantum_number)

    def report(self, pad: str = "") -> str:
        qn = " ".join(str(q) for q in self.quantum_number)
        return f"{pad}qn=[{qn}]  e={self.energy}  index={self.index}"


class BasisStateCollection:
    """
    Ordered, growable catalog of quantum states.

    Parameters
    ----------
    states : sequence of QuantumState, optional
        Initial records, stored in the given order

    Examples
    --------
    >>> catalog = BasisStateCollection.from_energies([0.5, 1.5, 1.5])
    >>> len(catalog)
    3
    >>> catalog[2].index
    2
    """

    def __init__(self, states: Optional[Sequence[QuantumState]] = None):
        self._records: List[QuantumState] = list(states) if states else []

    @classmethod
    def from_energies(cls, energies: Sequence[float],
                      dim: int = 1) -> 'BasisStateCollection':
        """
        Build an index-assigned catalog from precomputed energies.

        The energies are taken in the given order; quantum numbers are
        placeholders (all zeros) since only the ordering matters to
        selection.
        """
        zero = (0,) * dim
        return cls([QuantumState(zero, float(e), i) for i, e in enumerate(energies)])

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, item: Union[int, slice]):
        return self._records[item]

    def __iter__(self) -> Iterator[QuantumState]:
        return iter(self._records)

    def assign(self, slot: int, quantum_number: Sequence[int], energy: float) -> QuantumState:
        """
        Overwrite the record at ``slot`` or append a new one.

        The existing record's index is kept; a newly appended record has no
        index until the next ``energy_sort``.
        """
        n = len(self._records)
        if not 0 <= slot <= n:
            raise IndexError(f"Slot {slot} out of range [0, {n}]")
        qn = tuple(int(q) for q in quantum_number)
        if slot == n:
            record = QuantumState(qn, float(energy), None)
            self._records.append(record)
        else:
            record = self._records[slot]._replace(quantum_number=qn, energy=float(energy))
            self._records[slot] = record
        return record

    def set_energy(self, slot: int, energy: float) -> None:
        """Replace the energy of the record at ``slot``."""
        self._records[slot] = self._records[slot]._replace(energy=float(energy))

    def energy_sort(self, tol: float = DEFAULT_ENERGY_TOL) -> None:
        """
        Stable sort by energy, then reassign indices to sorted positions.

        Energies closer than ``tol`` compare equal, so degenerate states keep
        their insertion order.
        """
        if not self.has_energies():
            raise ConfigurationError(
                "BasisStateCollection.energy_sort: energies have not been assigned to all states")

        def compare(a: QuantumState, b: QuantumState) -> int:
            if abs(a.energy - b.energy) < tol:
                return 0
            return -1 if a.energy < b.energy else 1

        ordered = sorted(self._records, key=cmp_to_key(compare))
        self._records = [s._replace(index=i) for i, s in enumerate(ordered)]

    # ------------------------------------------------------------------
    # Finalization checks
    # ------------------------------------------------------------------

    def partial(self) -> bool:
        """True if some record has not been given an index."""
        return any(s.index is None for s in self._records)

    def has_indices(self) -> bool:
        return len(self._records) > 0 and not self.partial()

    def index_ordered(self) -> bool:
        """True if every record's index equals its position."""
        return all(s.index == i for i, s in enumerate(self._records))

    def has_energies(self) -> bool:
        return len(self._records) > 0 and all(s.energy is not None for s in self._records)

    def energy_ordered(self, tol: float = DEFAULT_ENERGY_TOL) -> bool:
        """True if energies are non-decreasing within ``tol``."""
        if not self.has_energies():
            return False
        e = self.energies
        return bool(np.all(np.diff(e) > -tol))

    # ------------------------------------------------------------------
    # Array views
    # ------------------------------------------------------------------

    @property
    def energies(self) -> np.ndarray:
        """Energies in catalog order (NaN where unassigned)."""
        return np.array([np.nan if s.energy is None else s.energy for s in self._records],
                        dtype=float)

    @property
    def quantum_numbers(self) -> np.ndarray:
        """Quantum numbers as an integer array of shape (n_states, dim)."""
        if not self._records:
            return np.zeros((0, 0), dtype=int)
        return np.array([s.quantum_number for s in self._records], dtype=int)

    @property
    def indices(self) -> List[Optional[int]]:
        return [s.index for s in self._records]

    def report(self, pad: str = "") -> str:
        lines = [f"{pad}BasisStateCollection report",
                 f"{pad}  # states = {len(self._records)}"]
        for i, state in enumerate(self._records):
            lines.append(state.report(f"{pad}  {i} "))
        lines.append(f"{pad}end BasisStateCollection report")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"BasisStateCollection(n_states={len(self._records)})"
