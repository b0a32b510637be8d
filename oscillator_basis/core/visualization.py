"""
Visualization utilities for oscillator state catalogs.

Level diagrams show each state as a short horizontal bar at its energy,
with degenerate states spread side by side and selected states highlighted.
"""

from typing import Optional, Sequence
import numpy as np

# Optional matplotlib import
try:
    import matplotlib.pyplot as plt
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False

from .shells import level_occupancies


def _check_matplotlib():
    """Check if matplotlib is available."""
    if not HAS_MATPLOTLIB:
        raise ImportError("matplotlib is required for visualization. "
                         "Install with: pip install matplotlib")


def plot_level_diagram(
    states: 'BasisStateCollection',
    selected: Optional[Sequence[int]] = None,
    ax: Optional['plt.Axes'] = None,
    label_quantum_numbers: bool = False,
    tol: float = 1e-6
    ) -> 'plt.Axes':
    """
    Plot the energy levels of an energy-ordered catalog.

    Parameters
    ----------
    states : BasisStateCollection
        Energy-ordered catalog
    selected : sequence of int, optional
        Global indices to highlight
    ax : plt.Axes, optional
        Matplotlib axes to plot on. If None, creates new figure.
    label_quantum_numbers : bool
        If True, annotate every bar with its quantum numbers
    tol : float
        Energies closer than this are drawn on the same level

    Returns
    -------
    plt.Axes
        The matplotlib axes object
    """
    _check_matplotlib()

    if ax is None:
        fig, ax = plt.subplots()

    chosen = set(selected) if selected is not None else set()
    width = 0.8
    position = 0
    for energy, count in level_occupancies(states, tol):
        offsets = np.arange(count) - 0.5 * (count - 1)
        for k, x in enumerate(offsets):
            state = states[position + k]
            is_selected = state.index in chosen
            ax.hlines(energy, x - 0.5 * width, x + 0.5 * width,
                      colors='C3' if is_selected else 'gray',
                      linewidth=3 if is_selected else 1.5)
            if label_quantum_numbers:
                ax.annotate(''.join(str(q) for q in state.quantum_number),
                            (x, energy), textcoords='offset points', xytext=(0, 3),
                            ha='center', fontsize=7)
        position += count

    ax.set_xticks([])
    ax.set_ylabel('Energy (Ha)')
    ax.set_title(f'{len(states)} states, {len(chosen)} selected')
    ax.grid(True, axis='y', alpha=0.3)

    return ax
