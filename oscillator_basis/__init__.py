"""
Oscillator Basis - harmonic oscillator basis generation and orbital selection.

This package enumerates eigenstates of a 1, 2 or 3 dimensional isotropic
harmonic oscillator into an energy-ordered catalog, and resolves orbital
selection requests (index ranges, occupation strings, energy cutoffs and
explicit energies) against such a catalog.

Main Features
-------------
- Energy-ordered, incrementally grown state catalog with stable global indices
- Closed-form shell sizing for D = 1, 2, 3
- Multi-criteria orbital selection with overlap detection
- Energy unit conversion for configuration input

Quick Start
-----------
>>> from oscillator_basis import SHOBasisGenerator, SelectionCriteria, OrbitalSelector
>>> gen = SHOBasisGenerator(dim=3, energy_quantum=0.5)
>>> gen.ensure_states(8)
>>> len(gen.states)
10

# Choose the ground state and the first excited shell by energy
>>> criteria = SelectionCriteria(energies=[0.75, 1.25])
>>> OrbitalSelector(criteria).get_indices(gen.states)
[0, 1, 2, 3]

Examples
--------
Building an orbital set from raw input attributes:

>>> from oscillator_basis import HarmonicOscillator, SHOBasisBuilder
>>> sho = HarmonicOscillator.from_attributes(3, {'frequency': '0.5'})
>>> criteria = SelectionCriteria.from_attributes({'ecut': '1.3', 'units': 'Ha'})
>>> builder = SHOBasisBuilder(sho)
>>> builder.initialize(criteria)
>>> builder.create_from_criteria(criteria).size
4
"""

import logging

__version__ = "0.1.0"

from .core import (
    # Errors
    BasisError,
    ConfigurationError,
    SizingError,
    SelectionError,
    # State catalog
    QuantumState,
    BasisStateCollection,
    # Units
    energy_unit,
    convert,
    convert_array,
    # Shell structure
    degeneracy,
    states_through_shell,
    shell_for_count,
    shell_for_energy,
    level_occupancies,
    # Generation and selection
    SHOBasisGenerator,
    SelectionCriteria,
    OrbitalSelector,
    OrbitalSet,
    SHOBasisBuilder,
    # Visualization
    plot_level_diagram,
)

from .systems import HarmonicOscillator

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    '__version__',
    'BasisError',
    'ConfigurationError',
    'SizingError',
    'SelectionError',
    'QuantumState',
    'BasisStateCollection',
    'energy_unit',
    'convert',
    'convert_array',
    'degeneracy',
    'states_through_shell',
    'shell_for_count',
    'shell_for_energy',
    'level_occupancies',
    'SHOBasisGenerator',
    'SelectionCriteria',
    'OrbitalSelector',
    'OrbitalSet',
    'SHOBasisBuilder',
    'HarmonicOscillator',
    'plot_level_diagram',
]
