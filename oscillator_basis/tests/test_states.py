"""
Unit tests for QuantumState records, BasisStateCollection and energy units.
"""

import unittest
import numpy as np

from oscillator_basis import (
    QuantumState,
    BasisStateCollection,
    ConfigurationError,
)
from oscillator_basis.core.units import energy_unit, convert, convert_array


class TestQuantumState(unittest.TestCase):
    """Test the state record."""

    def test_principal_number(self):
        state = QuantumState((1, 0, 2), 3.5, 4)
        self.assertEqual(state.principal_number, 3)
        self.assertEqual(state.dim, 3)

    def test_immutable(self):
        state = QuantumState((0,), 0.5, 0)
        with self.assertRaises(AttributeError):
            state.energy = 1.0


class TestCollection(unittest.TestCase):
    """Test catalog storage, sorting and finalization flags."""

    def test_assign_overwrites_and_appends(self):
        catalog = BasisStateCollection()
        catalog.assign(0, (0, 0), 1.0)
        catalog.assign(1, (0, 1), 2.0)
        catalog.energy_sort()
        catalog.assign(0, (1, 0), 2.0)

        self.assertEqual(len(catalog), 2)
        self.assertEqual(catalog[0].quantum_number, (1, 0))
        # overwriting keeps the record's index
        self.assertEqual(catalog[0].index, 0)

    def test_assign_out_of_range(self):
        catalog = BasisStateCollection()
        with self.assertRaises(IndexError):
            catalog.assign(1, (0,), 0.5)

    def test_energy_sort_is_stable_within_tolerance(self):
        catalog = BasisStateCollection()
        for slot, (qn, e) in enumerate([((0,), 1.0), ((1,), 0.5),
                                        ((2,), 1.0 - 1e-9), ((3,), 0.5)]):
            catalog.assign(slot, qn, e)
        self.assertTrue(catalog.partial())

        catalog.energy_sort(tol=1e-6)

        self.assertEqual([s.quantum_number[0] for s in catalog], [1, 3, 0, 2])
        self.assertEqual(catalog.indices, [0, 1, 2, 3])
        self.assertFalse(catalog.partial())
        self.assertTrue(catalog.index_ordered())
        self.assertTrue(catalog.energy_ordered())

    def test_energy_sort_requires_energies(self):
        catalog = BasisStateCollection([QuantumState((0,), None, None)])
        with self.assertRaises(ConfigurationError):
            catalog.energy_sort()

    def test_from_energies(self):
        catalog = BasisStateCollection.from_energies([0.5, 1.5, 1.5], dim=2)
        self.assertEqual(catalog.indices, [0, 1, 2])
        self.assertEqual(catalog.quantum_numbers.shape, (3, 2))
        np.testing.assert_allclose(catalog.energies, [0.5, 1.5, 1.5])
        self.assertTrue(catalog.has_indices())
        self.assertTrue(catalog.has_energies())

    def test_energies_view_marks_missing(self):
        catalog = BasisStateCollection([QuantumState((0,), None, 0),
                                        QuantumState((1,), 1.5, 1)])
        e = catalog.energies
        self.assertTrue(np.isnan(e[0]))
        self.assertEqual(e[1], 1.5)
        self.assertFalse(catalog.has_energies())
        self.assertFalse(catalog.energy_ordered())

    def test_empty_catalog_flags(self):
        catalog = BasisStateCollection()
        self.assertFalse(catalog.has_indices())
        self.assertFalse(catalog.has_energies())
        self.assertEqual(catalog.quantum_numbers.shape, (0, 0))

    def test_report(self):
        catalog = BasisStateCollection.from_energies([0.5])
        self.assertIn("# states = 1", catalog.report())


class TestUnits(unittest.TestCase):
    """Test energy unit conversion."""

    def test_hartree_in_ev(self):
        self.assertAlmostEqual(convert(1.0, 'Ha', 'eV'), 27.211386, places=5)

    def test_to_internal_unit(self):
        self.assertAlmostEqual(convert(27.211386245988, 'eV'), 1.0, places=9)
        self.assertAlmostEqual(convert(1.0, 'Ry'), 0.5, places=9)
        self.assertAlmostEqual(convert(1.0, 'Ha', 'K'), 315775.02, places=0)

    def test_array(self):
        np.testing.assert_allclose(convert_array([2.0, 4.0], 'Ry'), [1.0, 2.0])

    def test_unknown_unit(self):
        with self.assertRaises(ConfigurationError):
            energy_unit('erg')


if __name__ == '__main__':
    unittest.main()
