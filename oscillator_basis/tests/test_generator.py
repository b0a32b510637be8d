"""
Unit tests for the oscillator basis generator and shell sizing.

Tests cover:
- Shell degeneracies and closed-form shell estimates
- Enumeration completeness in 1D
- Energy ordering and index assignment after repeated growth
- Idempotent and incremental growth
- Energy scale refresh
- Sizing and configuration failures
"""

import unittest
from unittest import mock
import numpy as np

from oscillator_basis import (
    SHOBasisGenerator,
    ConfigurationError,
    SizingError,
    degeneracy,
    states_through_shell,
    shell_for_count,
    shell_for_energy,
    level_occupancies,
)


class TestShells(unittest.TestCase):
    """Test shell counting helpers."""

    def test_degeneracy_by_dimension(self):
        """Shell n holds 1, n+1 and (n+1)(n+2)/2 states in 1D, 2D, 3D."""
        for n in range(8):
            self.assertEqual(degeneracy(n, 1), 1)
            self.assertEqual(degeneracy(n, 2), n + 1)
            self.assertEqual(degeneracy(n, 3), (n + 1) * (n + 2) // 2)

    def test_states_through_shell_is_cumulative(self):
        for dim in (1, 2, 3):
            total = 0
            for n in range(10):
                total += degeneracy(n, dim)
                self.assertEqual(states_through_shell(n, dim), total)

    def test_shell_for_count_is_sufficient(self):
        """The estimated shell always holds at least the requested count."""
        for dim in (1, 2, 3):
            for count in range(1, 300):
                nmax = shell_for_count(count, dim)
                self.assertGreaterEqual(states_through_shell(nmax, dim), count,
                                        msg=f"dim={dim} count={count}")

    def test_shell_for_count_1d(self):
        self.assertEqual(shell_for_count(1, 1), 0)
        self.assertEqual(shell_for_count(8, 1), 7)

    def test_shell_for_count_2d_triangular(self):
        """Triangular numbers map exactly onto their shell."""
        self.assertEqual(shell_for_count(1, 2), 0)
        self.assertEqual(shell_for_count(3, 2), 1)
        self.assertEqual(shell_for_count(6, 2), 2)
        self.assertEqual(shell_for_count(7, 2), 3)

    def test_unsupported_dimension(self):
        with self.assertRaises(ConfigurationError):
            shell_for_count(5, 4)

    def test_shell_for_energy(self):
        # 3D shells at 1.5, 2.5, 3.5 (unit energy quantum)
        self.assertEqual(shell_for_energy(1.5, 1.0, 3), 0)
        self.assertEqual(shell_for_energy(2.0, 1.0, 3), 0)
        self.assertEqual(shell_for_energy(2.5, 1.0, 3), 1)
        self.assertEqual(shell_for_energy(1.0, 1.0, 3), -1)


class TestEnumeration(unittest.TestCase):
    """Test state enumeration."""

    def test_1d_completeness(self):
        """min_count=k gives exactly k+1 states with n = 0..k."""
        scale = 0.7
        k = 6
        gen = SHOBasisGenerator(dim=1, energy_quantum=scale)
        gen.ensure_states(k)

        self.assertEqual(len(gen.states), k + 1)
        qn = gen.quantum_numbers()[:, 0]
        np.testing.assert_array_equal(qn, np.arange(k + 1))
        np.testing.assert_allclose(gen.states.energies, scale * (np.arange(k + 1) + 0.5))

    def test_3d_shell_structure(self):
        gen = SHOBasisGenerator(dim=3, energy_quantum=1.0)
        gen.ensure_states(8)

        self.assertEqual(gen.nmax, 2)
        self.assertEqual(len(gen.states), 10)
        self.assertEqual(level_occupancies(gen.states), [(1.5, 1), (2.5, 3), (3.5, 6)])

    def test_strides(self):
        gen = SHOBasisGenerator(dim=3)
        gen.ensure_states(8)
        self.assertEqual(gen.strides, (9, 3, 1))

    def test_degenerate_states_in_lexicographic_order(self):
        """Ties keep enumeration order, which is lexicographic."""
        gen = SHOBasisGenerator(dim=2)
        gen.ensure_states(5)
        expected = [(0, 0), (0, 1), (1, 0), (0, 2), (1, 1), (2, 0)]
        self.assertEqual([s.quantum_number for s in gen.states], expected)

    def test_quantum_numbers_are_distinct(self):
        for dim in (1, 2, 3):
            gen = SHOBasisGenerator(dim=dim)
            gen.ensure_states(30)
            tuples = [s.quantum_number for s in gen.states]
            self.assertEqual(len(tuples), len(set(tuples)))
            for s in gen.states:
                self.assertAlmostEqual(s.energy, s.principal_number + 0.5 * dim)


class TestGrowth(unittest.TestCase):
    """Test ordering and growth across repeated calls."""

    def assert_ordered(self, gen):
        energies = gen.states.energies
        self.assertTrue(np.all(np.diff(energies) > -1e-6))
        self.assertEqual(gen.states.indices, list(range(len(gen.states))))

    def test_ordering_after_every_call(self):
        for dim in (1, 2, 3):
            gen = SHOBasisGenerator(dim=dim, energy_quantum=0.25)
            for target in (3, 10, 4, 25, 25, 60):
                gen.ensure_states(target)
                self.assertGreater(len(gen.states), target)
                self.assert_ordered(gen)

    def test_idempotent_growth(self):
        gen = SHOBasisGenerator(dim=3)
        gen.ensure_states(7)
        before = list(gen.states)
        gen.ensure_states(7)
        self.assertEqual(list(gen.states), before)

    def test_smaller_request_does_not_shrink(self):
        gen = SHOBasisGenerator(dim=2)
        gen.ensure_states(20)
        n = len(gen.states)
        gen.ensure_states(2)
        self.assertEqual(len(gen.states), n)

    def test_incremental_growth_keeps_earlier_states(self):
        gen = SHOBasisGenerator(dim=2)
        gen.ensure_states(5)
        first = [s.quantum_number for s in gen.states]
        gen.ensure_states(10)
        after = [s.quantum_number for s in gen.states]

        self.assertTrue(set(first).issubset(after))
        # with a fixed energy scale the earlier ranks do not move
        self.assertEqual(after[:len(first)], first)

    def test_energy_scale_refresh(self):
        """Changing the scale updates energies even without growth."""
        gen = SHOBasisGenerator(dim=2, energy_quantum=1.0)
        gen.ensure_states(5)
        gen.energy_quantum = 2.0
        gen.ensure_states(0)

        self.assertEqual(len(gen.states), 6)
        np.testing.assert_allclose(gen.states.energies, [2.0, 4.0, 4.0, 6.0, 6.0, 6.0])


class TestPrefixAndFailures(unittest.TestCase):
    """Test prefix selection and fatal errors."""

    def test_select_prefix(self):
        gen = SHOBasisGenerator(dim=3)
        gen.ensure_states(4)
        self.assertEqual(gen.select_prefix(5), [0, 1, 2, 3, 4])

    def test_select_prefix_empty_catalog(self):
        gen = SHOBasisGenerator(dim=1)
        with self.assertRaises(SizingError):
            gen.select_prefix(1)

    def test_select_prefix_too_large(self):
        gen = SHOBasisGenerator(dim=1)
        gen.ensure_states(2)
        with self.assertRaises(SizingError):
            gen.select_prefix(4)

    def test_unsupported_dimension(self):
        with self.assertRaises(ConfigurationError):
            SHOBasisGenerator(dim=4)
        with self.assertRaises(ConfigurationError):
            SHOBasisGenerator(dim=0)

    def test_undersized_estimate_is_fatal(self):
        """No retry with a larger shell when the estimate falls short."""
        gen = SHOBasisGenerator(dim=2)
        with mock.patch('oscillator_basis.core.generator.shell_for_count', return_value=0):
            with self.assertRaises(SizingError):
                gen.ensure_states(5)

    def test_report(self):
        gen = SHOBasisGenerator(dim=2, energy_quantum=0.5)
        gen.ensure_states(2)
        text = gen.report()
        self.assertIn("dimension      = 2", text)
        self.assertIn("# basis states = 3", text)


if __name__ == '__main__':
    unittest.main()
