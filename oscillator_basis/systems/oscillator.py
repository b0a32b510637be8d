"""
Physical parameters of an isotropic harmonic oscillator.

Mass, energy quantum and length scale are related (in atomic units) by
length = 1 / sqrt(mass * energy), so at most two of them are independent.
"""

from typing import Mapping, Optional, Sequence, Union
import logging
import math

import numpy as np

from ..core.errors import ConfigurationError
from ..core.shells import check_dimension

logger = logging.getLogger(__name__)


class HarmonicOscillator:
    """
    Isotropic D-dimensional harmonic oscillator.

    Parameters
    ----------
    dim : int
        Number of spatial dimensions (1, 2 or 3)
    mass : float, optional
        Particle mass; derived from ``length`` if not given
    energy : float, optional
        Energy quantum hbar*omega in Hartree (default 1.0)
    length : float, optional
        Oscillator length; derived from ``mass`` if not given, and 1.0 if
        neither is given
    center : float or sequence of float, optional
        Center of the potential (default origin)

    Examples
    --------
    >>> sho = HarmonicOscillator(3, energy=0.5)
    >>> sho.length
    1.0
    >>> sho.mass
    2.0
    """

    def __init__(self, dim: int, mass: Optional[float] = None,
                 energy: Optional[float] = None, length: Optional[float] = None,
                 center: Union[float, Sequence[float], None] = None):
        check_dimension(dim, "HarmonicOscillator")
        for name, value in (('mass', mass), ('energy', energy), ('length', length)):
            if value is not None and value <= 0:
                raise ConfigurationError(
                    f"HarmonicOscillator: {name} must be positive, got {value}")

        if energy is None:
            energy = 1.0
        if mass is None and length is None:
            length = 1.0
        if mass is None:
            mass = 1.0 / (energy * length * length)
        elif length is None:
            length = 1.0 / math.sqrt(mass * energy)

        self._dim = int(dim)
        self._mass = float(mass)
        self._energy = float(energy)
        self._length = float(length)
        if center is None:
            center = 0.0
        center = np.broadcast_to(np.asarray(center, dtype=float), (self._dim,))
        self._center = center.copy()
        logger.debug("Oscillator parameters: mass=%g energy=%g length=%g",
                     self._mass, self._energy, self._length)

    @classmethod
    def from_attributes(cls, dim: int, attrs: Mapping[str, str]) -> 'HarmonicOscillator':
        """
        Build from raw string-valued input attributes.

        Recognized keys are 'mass', 'energy' (alias 'frequency'), 'length'
        and 'center' (whitespace separated components).
        """
        def get(*names):
            for name in names:
                if attrs.get(name) is not None:
                    return float(attrs[name])
            return None

        try:
            mass = get('mass')
            energy = get('energy', 'frequency')
            length = get('length')
            center = attrs.get('center')
            if center is not None:
                center = [float(c) for c in center.split()]
        except ValueError as exc:
            raise ConfigurationError(f"HarmonicOscillator.from_attributes: {exc}") from exc
        return cls(dim, mass=mass, energy=energy, length=length, center=center)

    @property
    def dim(self) -> int:
        return self._dim

    @property
    def mass(self) -> float:
        return self._mass

    @property
    def energy(self) -> float:
        """Energy quantum hbar*omega (Hartree)."""
        return self._energy

    @property
    def frequency(self) -> float:
        """Angular frequency; equal to ``energy`` in atomic units."""
        return self._energy

    @property
    def length(self) -> float:
        return self._length

    @property
    def center(self) -> np.ndarray:
        return self._center.copy()

    def report(self, pad: str = "") -> str:
        lines = [
            f"{pad}HarmonicOscillator report",
            f"{pad}  dimension = {self._dim}",
            f"{pad}  mass      = {self._mass}",
            f"{pad}  frequency = {self._energy}",
            f"{pad}  energy    = {self._energy}",
            f"{pad}  length    = {self._length}",
            f"{pad}  center    = {self._center}",
            f"{pad}end HarmonicOscillator report",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (f"HarmonicOscillator(dim={self._dim}, mass={self._mass}, "
                f"energy={self._energy}, length={self._length})")
