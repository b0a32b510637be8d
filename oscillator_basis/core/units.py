"""
Energy unit conversion.

All energies inside the package are stored in Hartree. Energy-valued input
carries a unit tag and is converted on the way in.
"""

from typing import Dict, Sequence
import numpy as np
from scipy import constants

from .errors import ConfigurationError

INTERNAL_ENERGY_UNIT = "Ha"

_HARTREE_J = constants.physical_constants["Hartree energy"][0]

# Size of one unit, in Joule
ENERGY_UNITS_J: Dict[str, float] = {
    "Ha": _HARTREE_J,
    "Ry": constants.physical_constants["Rydberg constant times hc in J"][0],
    "eV": constants.electron_volt,
    "meV": 1e-3 * constants.electron_volt,
    "J": 1.0,
    "kJ/mol": 1e3 / constants.Avogadro,
    "kcal/mol": constants.kilo * constants.calorie / constants.Avogadro,
    "K": constants.Boltzmann,
}


def energy_unit(name: str) -> float:
    """
    Return the size of an energy unit in Joule.

    Parameters
    ----------
    name : str
        Unit tag, e.g. 'Ha', 'eV', 'Ry'

    Raises
    ------
    ConfigurationError
        If the unit is not known
    """
    try:
        return ENERGY_UNITS_J[name]
    except KeyError:
        raise ConfigurationError(
            f"energy_unit: unknown energy unit '{name}'. "
            f"Available: {sorted(ENERGY_UNITS_J)}") from None


def convert(value: float, from_unit: str, to_unit: str = INTERNAL_ENERGY_UNIT) -> float:
    """Convert a scalar energy between units."""
    return float(value) * energy_unit(from_unit) / energy_unit(to_unit)


def convert_array(values: Sequence[float], from_unit: str,
                  to_unit: str = INTERNAL_ENERGY_UNIT) -> np.ndarray:
    """Convert an array of energies between units."""
    factor = energy_unit(from_unit) / energy_unit(to_unit)
    return np.asarray(values, dtype=float) * factor
