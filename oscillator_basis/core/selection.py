"""
Orbital selection against an energy-ordered state catalog.

``SelectionCriteria`` bundles any number of independent requests (index
range, occupation string, explicit indices, energy cutoff, energy range,
explicit energies). ``OrbitalSelector`` resolves them against a finalized
catalog into one ascending list of global indices. The requests are expected
to be mutually exclusive: a state chosen by two of them is an error.

Example
-------
>>> catalog = BasisStateCollection.from_energies([0.5, 1.5, 1.5, 2.5])
>>> criteria = SelectionCriteria(occ="0101", energies=[0.5])
>>> OrbitalSelector(criteria).get_indices(catalog)
[0, 1, 3]
"""

from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Tuple, Union
import logging
import math

import numpy as np

from .errors import ConfigurationError, SelectionError
from .states import BasisStateCollection, DEFAULT_ENERGY_TOL
from .units import convert, convert_array

logger = logging.getLogger(__name__)


def _parse_int_list(values: Union[str, Sequence[int], None]) -> Optional[Tuple[int, ...]]:
    if values is None:
        return None
    if isinstance(values, str):
        values = values.split()
    return tuple(int(v) for v in values)


def _parse_float_list(values: Union[str, Sequence[float], None]) -> Optional[Tuple[float, ...]]:
    if values is None:
        return None
    if isinstance(values, str):
        values = values.split()
    return tuple(float(v) for v in values)


@dataclass(frozen=True)
class SelectionCriteria:
    """
    Immutable bundle of orbital selection requests.

    All energies are in Hartree. A field left as None is absent. Index and
    energy ranges are half-open and only count as present when both bounds
    are given.

    Parameters
    ----------
    size : int, optional
        Prefix request: the lowest ``size`` states
    index_min, index_max : int, optional
        Index range [index_min, index_max)
    occ : str, optional
        Occupation string; character '1' selects the state at that position
    ecut : float, optional
        Select every state with energy strictly below ``ecut``
    energy_min, energy_max : float, optional
        Energy range [energy_min, energy_max)
    indices : sequence of int, optional
        Explicit catalog positions
    energies : sequence of float, optional
        Target eigenvalues; stored sorted ascending
    matching_tol : float
        Tolerance used to match ``energies`` against the catalog
    """

    size: Optional[int] = None
    index_min: Optional[int] = None
    index_max: Optional[int] = None
    occ: Optional[str] = None
    ecut: Optional[float] = None
    energy_min: Optional[float] = None
    energy_max: Optional[float] = None
    indices: Optional[Tuple[int, ...]] = None
    energies: Optional[Tuple[float, ...]] = None
    matching_tol: float = field(default=DEFAULT_ENERGY_TOL)

    def __post_init__(self):
        if self.indices is not None:
            object.__setattr__(self, 'indices', _parse_int_list(self.indices))
        if self.energies is not None:
            object.__setattr__(self, 'energies', tuple(sorted(_parse_float_list(self.energies))))
        if self.matching_tol <= 0:
            raise ConfigurationError("SelectionCriteria: matching_tol must be positive")

    @classmethod
    def from_attributes(cls, attrs: Mapping[str, str],
                        indices: Union[str, Sequence[int], None] = None,
                        energies: Union[str, Sequence[float], None] = None,
                        energies_attrs: Optional[Mapping[str, str]] = None
                        ) -> 'SelectionCriteria':
        """
        Build criteria from raw string-valued input attributes.

        Parameters
        ----------
        attrs : mapping
            Attributes of the orbital set element: 'size', 'index_min',
            'index_max', 'occ', 'ecut', 'energy_min', 'energy_max' and
            'units' (required whenever an energy attribute is present)
        indices : str or sequence of int, optional
            Content of an explicit index list (whitespace separated if str)
        energies : str or sequence of float, optional
            Content of an explicit energy list
        energies_attrs : mapping, optional
            Attributes of the energy list: 'units' (required) and
            'matching_tol' (same units; default 1e-6 Ha)

        Raises
        ------
        ConfigurationError
            If an energy value is given without units or a value fails to parse
        """
        try:
            size = _optional(attrs, 'size', int)
            index_min = _optional(attrs, 'index_min', int)
            index_max = _optional(attrs, 'index_max', int)
            ecut = _optional(attrs, 'ecut', float)
            energy_min = _optional(attrs, 'energy_min', float)
            energy_max = _optional(attrs, 'energy_max', float)
            index_list = _parse_int_list(indices)
            energy_list = _parse_float_list(energies)
        except ValueError as exc:
            raise ConfigurationError(f"SelectionCriteria.from_attributes: {exc}") from exc
        occ = attrs.get('occ')

        if any(v is not None for v in (ecut, energy_min, energy_max)):
            units = attrs.get('units')
            if units is None:
                raise ConfigurationError(
                    "SelectionCriteria.from_attributes: ecut or energy range present, "
                    "but units have not been provided")
            if ecut is not None:
                ecut = convert(ecut, units)
            if energy_min is not None:
                energy_min = convert(energy_min, units)
            if energy_max is not None:
                energy_max = convert(energy_max, units)

        matching_tol = DEFAULT_ENERGY_TOL
        if energy_list is not None:
            energies_attrs = energies_attrs or {}
            units = energies_attrs.get('units')
            if units is None:
                raise ConfigurationError(
                    "SelectionCriteria.from_attributes: energies present, "
                    "but units have not been provided")
            energy_list = tuple(convert_array(energy_list, units).tolist())
            try:
                tol_in = _optional(energies_attrs, 'matching_tol', float)
            except ValueError as exc:
                raise ConfigurationError(f"SelectionCriteria.from_attributes: {exc}") from exc
            if tol_in is not None:
                matching_tol = convert(tol_in, units)

        criteria = cls(size=size, index_min=index_min, index_max=index_max, occ=occ,
                       ecut=ecut, energy_min=energy_min, energy_max=energy_max,
                       indices=index_list, energies=energy_list,
                       matching_tol=matching_tol)
        logger.debug("Parsed selection criteria: %r", criteria)
        return criteria

    # ------------------------------------------------------------------
    # Presence flags
    # ------------------------------------------------------------------

    @property
    def has_size(self) -> bool:
        return self.size is not None

    @property
    def has_index_range(self) -> bool:
        return self.index_min is not None and self.index_max is not None

    @property
    def has_occ(self) -> bool:
        return self.occ is not None

    @property
    def has_ecut(self) -> bool:
        return self.ecut is not None

    @property
    def has_energy_range(self) -> bool:
        return self.energy_min is not None and self.energy_max is not None

    @property
    def has_indices(self) -> bool:
        return self.indices is not None

    @property
    def has_energies(self) -> bool:
        return self.energies is not None

    @property
    def has_index_info(self) -> bool:
        return self.has_size or self.has_index_range or self.has_occ or self.has_indices

    @property
    def has_energy_info(self) -> bool:
        return self.has_ecut or self.has_energy_range or self.has_energies

    # ------------------------------------------------------------------
    # Extrema (reporting and basis sizing only)
    # ------------------------------------------------------------------

    def occupied_positions(self) -> List[int]:
        """Positions marked '1' in the occupation string."""
        if self.occ is None:
            return []
        return [i for i, c in enumerate(self.occ) if c == '1']

    def index_extrema(self) -> Tuple[Optional[int], Optional[int]]:
        """
        Lowest and highest index over all index-based requests.

        The index range contributes its upper bound as given. Returns
        (None, None) if there is no index request.
        """
        if not self.has_index_info:
            return None, None
        candidates = []
        if self.has_size:
            candidates += [0, self.size - 1]
        if self.has_index_range:
            candidates += [self.index_min, self.index_max]
        candidates += self.occupied_positions()
        if self.has_indices:
            candidates += list(self.indices)
        if not candidates:
            return None, None
        return min(candidates), max(candidates)

    def energy_extrema(self) -> Tuple[Optional[float], Optional[float]]:
        """
        Lowest and highest energy over all energy-based requests.

        An energy cutoff has no lower bound, reported as -inf.
        """
        if not self.has_energy_info:
            return None, None
        lowest = math.inf
        highest = -math.inf
        if self.has_ecut:
            lowest = -math.inf
            highest = max(highest, self.ecut)
        if self.has_energy_range:
            lowest = min(lowest, self.energy_min)
            highest = max(highest, self.energy_max)
        if self.has_energies and self.energies:
            lowest = min(lowest, self.energies[0])
            highest = max(highest, self.energies[-1])
        return lowest, highest

    @property
    def lowest_index(self) -> Optional[int]:
        return self.index_extrema()[0]

    @property
    def highest_index(self) -> Optional[int]:
        return self.index_extrema()[1]

    @property
    def lowest_energy(self) -> Optional[float]:
        return self.energy_extrema()[0]

    @property
    def highest_energy(self) -> Optional[float]:
        return self.energy_extrema()[1]

    def report(self, pad: str = "") -> str:
        flags = ['has_size', 'has_index_range', 'has_occ', 'has_ecut',
                 'has_energy_range', 'has_indices', 'has_energies']
        lines = [f"{pad}SelectionCriteria report"]
        for name in flags:
            lines.append(f"{pad}  {name:<16} = {getattr(self, name)}")
        for name in ['size', 'index_min', 'index_max', 'occ', 'ecut',
                     'energy_min', 'energy_max', 'matching_tol']:
            lines.append(f"{pad}  {name:<16} = {getattr(self, name)}")
        indices = self.indices or ()
        energies = self.energies or ()
        lines.append(f"{pad}  # of indices     = {len(indices)}")
        lines.append(f"{pad}  indices          = {' '.join(str(i) for i in indices)}")
        lines.append(f"{pad}  # of energies    = {len(energies)}")
        lines.append(f"{pad}  energies         = {' '.join(str(e) for e in energies)}")
        lowest_index, highest_index = self.index_extrema()
        lowest_energy, highest_energy = self.energy_extrema()
        lines.append(f"{pad}  lowest_index     = {lowest_index}")
        lines.append(f"{pad}  highest_index    = {highest_index}")
        lines.append(f"{pad}  lowest_energy    = {lowest_energy}")
        lines.append(f"{pad}  highest_energy   = {highest_energy}")
        lines.append(f"{pad}end SelectionCriteria report")
        return "\n".join(lines)


def _optional(attrs: Mapping[str, str], name: str, kind):
    value = attrs.get(name)
    if value is None:
        return None
    return kind(value)


class OrbitalSelector:
    """
    Resolves a ``SelectionCriteria`` into one sorted list of global indices.

    The result is computed on the first call to ``get_indices`` and cached
    for the lifetime of the selector.

    Parameters
    ----------
    criteria : SelectionCriteria
        Requests to resolve
    """

    def __init__(self, criteria: SelectionCriteria):
        self._criteria = criteria
        self._all_indices: Optional[List[int]] = None
        self._occupations = np.zeros(0, dtype=bool)
        self._pending: List[int] = []

    @property
    def criteria(self) -> SelectionCriteria:
        return self._criteria

    @property
    def occupations(self) -> np.ndarray:
        """Occupancy bitmap over global indices from the last resolution."""
        return self._occupations.copy()

    @property
    def index_request(self) -> bool:
        c = self._criteria
        return c.has_index_range or c.has_occ or c.has_indices

    @property
    def energy_request(self) -> bool:
        return self._criteria.has_energy_info

    def get_indices(self, states: BasisStateCollection) -> List[int]:
        """
        Resolve every request against ``states``.

        Parameters
        ----------
        states : BasisStateCollection
            Finalized catalog: indexed, index-ordered and energy-ordered

        Returns
        -------
        list of int
            Ascending, duplicate-free global indices

        Raises
        ------
        ConfigurationError
            If the catalog has not been finalized or lacks energies needed by
            an energy request
        SelectionError
            If a request is out of range, overlaps another, or names an
            energy not present in the catalog
        """
        if self._all_indices is None:
            self._pending = []
            if self.index_request or self.energy_request:
                if states.partial() or not states.has_indices() or not states.index_ordered():
                    raise ConfigurationError(
                        "OrbitalSelector.get_indices: state info for this basis has not "
                        "been properly initialized")
                if self.energy_request and not states.has_energies():
                    raise ConfigurationError(
                        "OrbitalSelector.get_indices: energies requested for orbital set "
                        "but energies have not been assigned to states")

                self._occupations = np.zeros(0, dtype=bool)
                self._occupy_index_range(states)
                self._occupy_occ(states)
                self._occupy_indices(states)
                self._occupy_ecut(states)
                self._occupy_energy_range(states)
                self._occupy_energies(states)
            self._all_indices = sorted(self._pending)
            logger.debug("Resolved %d orbital indices", len(self._all_indices))
        return list(self._all_indices)

    def _occupy_index_range(self, states: BasisStateCollection) -> None:
        c = self._criteria
        if c.has_index_range:
            self.occupy("index_range", range(c.index_min, c.index_max), states)

    def _occupy_occ(self, states: BasisStateCollection) -> None:
        if self._criteria.has_occ:
            self.occupy("occ", self._criteria.occupied_positions(), states)

    def _occupy_indices(self, states: BasisStateCollection) -> None:
        if self._criteria.has_indices:
            self.occupy("indices", self._criteria.indices, states)

    def _occupy_ecut(self, states: BasisStateCollection) -> None:
        c = self._criteria
        if c.has_ecut:
            e = states.energies
            self.occupy("ecut", np.nonzero(e < c.ecut)[0].tolist(), states)

    def _occupy_energy_range(self, states: BasisStateCollection) -> None:
        c = self._criteria
        if c.has_energy_range:
            e = states.energies
            mask = (e >= c.energy_min) & (e < c.energy_max)
            self.occupy("energy_range", np.nonzero(mask)[0].tolist(), states)

    def _occupy_energies(self, states: BasisStateCollection) -> None:
        c = self._criteria
        if not c.has_energies:
            return
        if not states.energy_ordered():
            raise ConfigurationError(
                "OrbitalSelector.occupy(energies): states are not energy ordered")
        e = states.energies
        n = len(e)
        tol = c.matching_tol
        ind: List[int] = []
        i = 0
        for target in c.energies:
            found = False
            while i < n:
                while i < n and abs(target - e[i]) < tol:
                    ind.append(i)
                    i += 1
                    found = True
                if found:
                    break
                i += 1
            if not found:
                raise SelectionError(
                    f"OrbitalSelector.occupy(energies): energy eigenvalue {target} not found")
        self.occupy("energies", ind, states)

    def occupy(self, source: str, positions: Sequence[int],
               states: BasisStateCollection) -> None:
        """
        Mark catalog positions as selected.

        Parameters
        ----------
        source : str
            Name of the request, used in error messages
        positions : sequence of int
            Candidate catalog positions
        states : BasisStateCollection
            Catalog used to translate positions to global indices

        Raises
        ------
        SelectionError
            If a position is outside the catalog or its state is already
            selected by an earlier request
        """
        positions = list(positions)
        if not positions:
            return
        if min(positions) < 0 or max(positions) >= len(states):
            raise SelectionError(
                f"OrbitalSelector.occupy({source}): indices are outside the range of states")
        for p in positions:
            iocc = states[p].index
            if iocc >= len(self._occupations):
                grown = np.zeros(iocc + 1, dtype=bool)
                grown[:len(self._occupations)] = self._occupations
                self._occupations = grown
            if self._occupations[iocc]:
                raise SelectionError(
                    f"OrbitalSelector.occupy({source}): request has overlapping index ranges")
            self._pending.append(iocc)
            self._occupations[iocc] = True

    def report(self, pad: str = "") -> str:
        """Criteria dump plus the resolved indices, also sent to the log."""
        lines = [self._criteria.report(pad)]
        resolved = "not computed" if self._all_indices is None else \
            " ".join(str(i) for i in self._all_indices)
        lines.append(f"{pad}  resolved indices = {resolved}")
        text = "\n".join(lines)
        logger.info("%s", text)
        return text

    def __repr__(self) -> str:
        return f"OrbitalSelector({self._criteria!r})"
