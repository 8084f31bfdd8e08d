import unittest

from rational64._checked import (
    INT64_MAX,
    INT64_MIN,
    UINT64_MAX,
    fits_int64,
    fits_uint64,
    gcd,
    would_overflow_add,
    would_overflow_mul,
    wrap_int64,
)


class WrapTests(unittest.TestCase):
    def test_limits(self):
        self.assertEqual(INT64_MIN, -(2**63))
        self.assertEqual(INT64_MAX, 2**63 - 1)
        self.assertEqual(UINT64_MAX, 2**64 - 1)

    def test_wrap_int64(self):
        self.assertEqual(wrap_int64(5), 5)
        self.assertEqual(wrap_int64(INT64_MAX + 1), INT64_MIN)
        self.assertEqual(wrap_int64(INT64_MIN - 1), INT64_MAX)
        self.assertEqual(wrap_int64(2**64), 0)
        self.assertEqual(wrap_int64(UINT64_MAX), -1)

    def test_fits(self):
        self.assertTrue(fits_int64(INT64_MIN))
        self.assertFalse(fits_int64(INT64_MAX + 1))
        self.assertTrue(fits_uint64(UINT64_MAX))
        self.assertFalse(fits_uint64(-1))


class GcdTests(unittest.TestCase):
    def test_zero_operand(self):
        self.assertEqual(gcd(0, 7), 7)
        self.assertEqual(gcd(7, 0), 7)
        self.assertEqual(gcd(0, 0), 0)

    def test_sign_is_ignored(self):
        self.assertEqual(gcd(-12, 18), 6)
        self.assertEqual(gcd(INT64_MIN, 2**10), 2**10)


class MulOverflowTests(unittest.TestCase):
    def test_zero_never_overflows(self):
        self.assertFalse(would_overflow_mul(0, INT64_MIN))
        self.assertFalse(would_overflow_mul(INT64_MAX, 0))
        self.assertFalse(would_overflow_mul(0, UINT64_MAX))

    def test_min_times_minus_one(self):
        self.assertTrue(would_overflow_mul(INT64_MIN, -1))
        self.assertTrue(would_overflow_mul(-1, INT64_MIN))
        self.assertFalse(would_overflow_mul(INT64_MIN, 1))

    def test_boundaries(self):
        self.assertFalse(would_overflow_mul(2**31, 2**31))
        self.assertTrue(would_overflow_mul(2**32, 2**31))
        self.assertFalse(would_overflow_mul(-(2**32), 2**31))
        self.assertTrue(would_overflow_mul(2**32, 2**32))
        self.assertFalse(would_overflow_mul(INT64_MAX, -1))
        self.assertTrue(would_overflow_mul(INT64_MAX, 2))
        self.assertTrue(would_overflow_mul(INT64_MIN, 2))

    def test_agrees_with_exact_product(self):
        samples = [1, -1, 2, -3, 3037000499, 3037000500, -3037000500, 2**40, INT64_MAX, INT64_MIN]
        for a in samples:
            for b in samples:
                expected = not fits_int64(a * b)
                self.assertEqual(would_overflow_mul(a, b), expected, (a, b))

    def test_operand_outside_signed_range(self):
        self.assertTrue(would_overflow_mul(1, INT64_MAX + 1))


class AddOverflowTests(unittest.TestCase):
    def test_same_sign_overflow(self):
        self.assertTrue(would_overflow_add(INT64_MAX, 1))
        self.assertTrue(would_overflow_add(INT64_MIN, -1))
        self.assertTrue(would_overflow_add(INT64_MIN, INT64_MIN))

    def test_mixed_signs_never_overflow(self):
        self.assertFalse(would_overflow_add(INT64_MAX, INT64_MIN))
        self.assertFalse(would_overflow_add(-1, INT64_MAX))

    def test_in_range(self):
        self.assertFalse(would_overflow_add(INT64_MAX - 1, 1))
        self.assertFalse(would_overflow_add(INT64_MIN + 1, -1))
        self.assertFalse(would_overflow_add(0, 0))


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
