"""
Physical system definitions.

- HarmonicOscillator: isotropic oscillator parameters (mass, energy, length)
"""

from .oscillator import HarmonicOscillator

__all__ = [
    'HarmonicOscillator',
]
