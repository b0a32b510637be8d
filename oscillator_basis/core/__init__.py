"""
Core module for the oscillator basis package.

This module exports the state catalog, the basis generator, the orbital
selector and the supporting shell, unit and error utilities.
"""

from .errors import (
    BasisError,
    ConfigurationError,
    SizingError,
    SelectionError,
)

from .states import (
    DEFAULT_ENERGY_TOL,
    QuantumState,
    BasisStateCollection,
)

from .units import (
    INTERNAL_ENERGY_UNIT,
    ENERGY_UNITS_J,
    energy_unit,
    convert,
    convert_array,
)

from .shells import (
    SUPPORTED_DIMENSIONS,
    degeneracy,
    states_through_shell,
    shell_for_count,
    shell_for_energy,
    level_occupancies,
)

from .generator import SHOBasisGenerator

from .selection import (
    SelectionCriteria,
    OrbitalSelector,
)

from .builder import (
    OrbitalSet,
    SHOBasisBuilder,
)

from .visualization import plot_level_diagram

__all__ = [
    # Errors
    'BasisError',
    'ConfigurationError',
    'SizingError',
    'SelectionError',
    # State catalog
    'DEFAULT_ENERGY_TOL',
    'QuantumState',
    'BasisStateCollection',
    # Units
    'INTERNAL_ENERGY_UNIT',
    'ENERGY_UNITS_J',
    'energy_unit',
    'convert',
    'convert_array',
    # Shell structure
    'SUPPORTED_DIMENSIONS',
    'degeneracy',
    'states_through_shell',
    'shell_for_count',
    'shell_for_energy',
    'level_occupancies',
    # Generation and selection
    'SHOBasisGenerator',
    'SelectionCriteria',
    'OrbitalSelector',
    'OrbitalSet',
    'SHOBasisBuilder',
    # Visualization
    'plot_level_diagram',
]
