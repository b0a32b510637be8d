"""
Energy level diagrams of the 1D, 2D and 3D harmonic oscillator bases,
with an energy-based orbital selection highlighted.

Usage:
    python scripts/plot_sho_levels.py

Output:
    figures/sho_levels/sho_levels.{pdf,png}
"""

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from oscillator_basis import (
    HarmonicOscillator,
    SHOBasisBuilder,
    SelectionCriteria,
    plot_level_diagram,
)

# =============================================================================
# Configuration
# =============================================================================

ENERGY = 0.5
N_STATES = 20
ECUT = 2.0

DPI = 150
OUTPUT_DIR = 'figures/sho_levels'


def main():
    out_dir = Path(OUTPUT_DIR)
    out_dir.mkdir(parents=True, exist_ok=True)

    fig, axes = plt.subplots(1, 3, figsize=(12, 5), sharey=True)
    for ax, dim in zip(axes, (1, 2, 3)):
        builder = SHOBasisBuilder(HarmonicOscillator(dim, energy=ENERGY))
        builder.initialize(SelectionCriteria(size=N_STATES))
        criteria = SelectionCriteria(ecut=ECUT)
        orbitals = builder.create_from_criteria(criteria)
        plot_level_diagram(builder.states, selected=orbitals.indices, ax=ax,
                           label_quantum_numbers=(dim < 3))
        ax.set_title(f'D = {dim}: {orbitals.size} states below {ECUT} Ha')

    fig.suptitle(f'Harmonic oscillator levels ($\\hbar\\omega = {ENERGY}$ Ha)')
    fig.tight_layout()

    for ext in ['pdf', 'png']:
        p = out_dir / f'sho_levels.{ext}'
        fig.savefig(p, dpi=DPI, bbox_inches='tight')
        print(f'Saved: {p}')


if __name__ == '__main__':
    main()
