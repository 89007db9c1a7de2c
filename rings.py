#!/usr/bin/python3
#-*- coding:utf8 -*-

"Integer arithmetic on coefficients and powers of symbolic polynomials."

from numbers import Integral


__all__ = 'NotExactlyDivisible', 'coefficient', 'power', 'checked_div', 'floor_div', 'ceil_div', 'int_pow'


class NotExactlyDivisible(ArithmeticError):
	"Raised when an exact division was requested but the divisor leaves a remainder."


def coefficient(value):
	"Check that `value` may serve as a coefficient: any integral number, e.g. `int` or a fixed width numpy integer."
	if isinstance(value, Integral):
		return value
	raise TypeError(f"Coefficient must be an integral number, got {type(value).__name__} instead.")


def power(value):
	"Check that `value` may serve as a power of a composite factor and convert it to `int`."
	if not isinstance(value, Integral):
		raise TypeError(f"Power must be an integral number, got {type(value).__name__} instead.")
	if value < 0:
		raise ValueError(f"Power must not be negative (got {value}).")
	return int(value)


def checked_div(dividend, divisor):
	"Return `dividend / divisor` if the division is exact, `None` otherwise (also for zero divisor)."
	if divisor == 0:
		return None
	quotient, remainder = divmod(dividend, divisor)
	if remainder != 0:
		return None
	return quotient


def floor_div(dividend, divisor):
	"Largest integer not greater than `dividend / divisor` (rounds towards negative infinity, not towards zero)."
	return dividend // divisor


def ceil_div(dividend, divisor):
	"Smallest integer not less than `dividend / divisor`."
	return -((-dividend) // divisor)


def int_pow(base, exponent):
	"Raise `base` to a non-negative integer power by repeated squaring, staying within the type of `base`."
	result = base * 0 + 1
	while exponent:
		if exponent & 1:
			result *= base
		exponent >>= 1
		if exponent:
			base *= base
	return result


if __debug__:
	from itertools import chain
	
	def test_capabilities():
		assert coefficient(5) == 5
		assert coefficient(-5) == -5
		assert power(3) == 3
		assert power(0) == 0

		for bad in (1.5, "1", None):
			try:
				coefficient(bad)
			except TypeError:
				pass
			else:
				assert False, repr(bad)

		try:
			power(-1)
		except ValueError:
			pass
		else:
			assert False

		try:
			power(2.0)
		except TypeError:
			pass
		else:
			assert False

	def test_division():
		assert checked_div(12, 4) == 3
		assert checked_div(-12, 4) == -3
		assert checked_div(12, 5) is None
		assert checked_div(12, 0) is None
		assert checked_div(0, 7) == 0

		assert floor_div(7, 2) == 3
		assert ceil_div(7, 2) == 4
		assert floor_div(-7, 2) == -4
		assert ceil_div(-7, 2) == -3
		assert floor_div(7, -2) == -4
		assert ceil_div(7, -2) == -3
		assert floor_div(-7, -2) == 3
		assert ceil_div(-7, -2) == 4
		assert floor_div(8, 2) == ceil_div(8, 2) == 4

		for a in range(-20, 21):
			for b in chain(range(-6, 0), range(1, 7)):
				if b > 0:
					assert floor_div(a, b) * b <= a < (floor_div(a, b) + 1) * b
				else:
					assert floor_div(a, b) * b >= a > (floor_div(a, b) + 1) * b
				assert ceil_div(a, b) - floor_div(a, b) == (0 if a % b == 0 else 1)

	def test_int_pow():
		assert int_pow(3, 0) == 1
		assert int_pow(3, 1) == 3
		assert int_pow(-2, 5) == -32
		assert int_pow(0, 0) == 1
		for b in range(-4, 5):
			for e in range(8):
				assert int_pow(b, e) == b ** e


if __debug__ and __name__ == '__main__':
	test_capabilities()
	test_division()
	test_int_pow()
