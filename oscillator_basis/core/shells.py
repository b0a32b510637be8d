"""
Shell structure of the isotropic harmonic oscillator.

A shell collects all states with the same principal number n, i.e. the same
energy (n + D/2) hbar*omega. The helpers here count states per shell and
invert those counts in closed form, which is how the generator decides how
far to enumerate.
"""

from typing import List, Tuple
import math

from scipy.special import comb

from .errors import ConfigurationError

SUPPORTED_DIMENSIONS = (1, 2, 3)


def check_dimension(dim: int, where: str) -> None:
    if dim not in SUPPORTED_DIMENSIONS:
        raise ConfigurationError(
            f"{where}: dimensions other than 1, 2, or 3 are not supported (got {dim})")


def degeneracy(n: int, dim: int) -> int:
    """
    Number of quantum-number tuples with principal number ``n``.

    Parameters
    ----------
    n : int
        Principal quantum number (>= 0)
    dim : int
        Number of spatial dimensions

    Returns
    -------
    int
        C(n + dim - 1, dim - 1)
    """
    if n < 0:
        return 0
    return int(comb(n + dim - 1, dim - 1, exact=True))


def states_through_shell(nmax: int, dim: int) -> int:
    """Number of states with principal number <= ``nmax``: C(nmax + dim, dim)."""
    if nmax < 0:
        return 0
    return int(comb(nmax + dim, dim, exact=True))


def shell_for_count(count: int, dim: int) -> int:
    """
    Closed-form estimate of the highest shell needed to hold ``count`` states.

    Inverts the cumulative shell counts: linear in 1D, triangular numbers in
    2D and tetrahedral numbers in 3D (Cardano root).

    Parameters
    ----------
    count : int
        Number of states required (>= 1)
    dim : int
        Number of spatial dimensions (1, 2 or 3)

    Returns
    -------
    int
        Highest principal number nmax to enumerate

    Raises
    ------
    ConfigurationError
        If ``dim`` is not 1, 2 or 3
    """
    check_dimension(dim, "shell_for_count")
    N = float(count)
    if dim == 1:
        return int(count) - 1
    if dim == 2:
        return int(math.ceil(0.5 * math.sqrt(8.0 * N + 1.0) - 1.5))
    f = math.exp(math.log(81.0 * N + 3.0 * math.sqrt(729.0 * N * N - 3.0)) / 3.0)
    return int(math.ceil(f / 3.0 + 1.0 / f - 2.0))


def shell_for_energy(emax: float, energy_quantum: float, dim: int) -> int:
    """
    Highest shell whose energy does not exceed ``emax``.

    Shells within a relative 1e-6 of ``emax`` count as not exceeding it.
    Returns -1 if even the ground state lies above ``emax``.
    """
    check_dimension(dim, "shell_for_energy")
    if energy_quantum <= 0:
        raise ConfigurationError("shell_for_energy: energy quantum must be positive")
    if math.isinf(emax) or math.isnan(emax):
        raise ConfigurationError(f"shell_for_energy: invalid energy bound {emax}")
    return int(math.floor(emax / energy_quantum - 0.5 * dim + 1e-6))


def level_occupancies(states, tol: float = 1e-6) -> List[Tuple[float, int]]:
    """
    Group an energy-ordered catalog into levels.

    Parameters
    ----------
    states : BasisStateCollection
        Energy-ordered catalog
    tol : float
        Energies closer than this belong to the same level

    Returns
    -------
    list of (energy, count)
        One entry per distinct level, in catalog order
    """
    levels: List[Tuple[float, int]] = []
    for state in states:
        if levels and abs(state.energy - levels[-1][0]) < tol:
            levels[-1] = (levels[-1][0], levels[-1][1] + 1)
        else:
            levels.append((state.energy, 1))
    return levels
