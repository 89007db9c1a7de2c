#!/usr/bin/python3
#-*- coding:utf8 -*-

"Recover values of identifiers from observed values of polynomials."

import logging

from rings import coefficient as as_coefficient, checked_div
from composite import DivisionByZero, MissingIdentifier
from polynomial import Polynomial


__all__ = 'DeductionError', 'Underdetermined', 'Inconsistent', 'deduce_values'


logger = logging.getLogger(__name__)


class DeductionError(ArithmeticError):
	"Base class of failures of `deduce_values`."


class Underdetermined(DeductionError):
	"The equations do not pin down the values of all identifiers."

	def __init__(self, equations, identifiers):
		super().__init__(f"Could not deduce {', '.join(sorted(str(_id) for _id in identifiers))} from {len(equations)} unresolved equation(s).")
		self.equations = equations
		self.identifiers = identifiers


class Inconsistent(DeductionError):
	"The equations contradict each other or have no integer solution."

	def __init__(self, equation, reason):
		polynomial, value = equation
		super().__init__(f"Equation {polynomial} = {value} {reason}.")
		self.equation = equation


def solve_linear(polynomial, value):
	"""
	If `polynomial` is `c·x + d` for a single identifier `x`, return `(x, (value - d) / c)`, where the quotient
	is `None` if the division is not exact. Otherwise return `None`.
	"""

	if len(polynomial.unique_identifiers()) != 1:
		return None

	linear = [_m for _m in polynomial.monomials if not _m.is_constant()]
	if len(linear) != 1:
		return None

	term = linear[0]
	if len(term.powers) != 1:
		return None
	composite, power = term.powers[0]
	if power != 1 or not composite.is_var():
		return None

	rest = sum(_m.coefficient for _m in polynomial.monomials if _m.is_constant())
	return composite.identifier, checked_div(value - rest, term.coefficient)


def deduce_values(pairs):
	"""
	Find the values of all identifiers such that every polynomial of `pairs` (an iterable of
	`(polynomial, observed value)`) evaluates to its observed value.

	Repeatedly substitutes the known values into the unresolved equations and solves the ones that
	became linear in a single identifier. Returns a dict `identifier -> value`. Raises `Underdetermined`
	if some equation could not be resolved and `Inconsistent` if the equations contradict.
	"""

	equations = [(Polynomial(_polynomial), as_coefficient(_value)) for (_polynomial, _value) in pairs]
	values = {}

	unresolved = equations
	progress = True
	while unresolved and progress:
		progress = False
		remaining = []

		for equation in unresolved:
			polynomial, value = equation

			try:
				reduced = polynomial.substitute(values)
			except DivisionByZero:
				raise Inconsistent(equation, f"divides by zero under {values}") from None

			if reduced.is_constant():
				if reduced.constant_value() != value:
					raise Inconsistent(equation, f"reduces to {reduced.constant_value()}")
				logger.debug("resolved %s = %s", polynomial, value)
				progress = True
				continue

			solution = solve_linear(reduced, value)
			if solution is None:
				remaining.append(equation)
				continue

			identifier, result = solution
			if result is None:
				raise Inconsistent(equation, f"has no integer solution for {identifier}")

			values[identifier] = result
			logger.debug("deduced %s = %s from %s = %s", identifier, result, polynomial, value)
			progress = True

		unresolved = remaining

	if unresolved:
		identifiers = set()
		for polynomial, value in unresolved:
			polynomial.unique_identifiers(identifiers)
		identifiers.difference_update(values)
		if logger.isEnabledFor(logging.DEBUG):
			logger.debug("unresolved equations: %s", ", ".join(f"{_p} = {_v}" for (_p, _v) in unresolved))
		raise Underdetermined(unresolved, identifiers)

	for equation in equations:
		polynomial, value = equation
		try:
			result = polynomial.eval(values)
		except MissingIdentifier as error:
			raise Underdetermined([equation], {error.identifier}) from error
		except DivisionByZero:
			raise Inconsistent(equation, f"divides by zero under {values}") from None
		if result != value:
			raise Inconsistent(equation, f"evaluates to {result} under {values}")

	return values


if __debug__:
	import random
	from polynomial import variable, floor, ceil, max

	def test_worked_example():
		a = variable('a')
		b = variable('b')
		c = variable('c')

		polynomials = [5 * b + 2, a * b, a * b + a * c + b + c]
		observed = {'a': 5, 'b': 3, 'c': 8}
		pairs = [(_p, _p.eval(observed)) for _p in polynomials]
		assert [_v for (_p, _v) in pairs] == [17, 15, 66]

		assert deduce_values(pairs) == observed
		assert deduce_values(reversed(pairs)) == observed
		assert deduce_values([(5 * b + 2, 17), (a * b, 15), (a * b + a * c + b + c, 66)]) == {'a': 5, 'b': 3, 'c': 8}

	def test_trivial():
		a = variable('a')

		assert deduce_values([]) == {}
		assert deduce_values([(Polynomial(3), 3)]) == {}
		assert deduce_values([(a, -4)]) == {'a': -4}
		assert deduce_values([(3 * a - 2, 7)]) == {'a': 3}
		assert deduce_values([(a - a + 1, 1)]) == {}

	def test_composites():
		a = variable('a')
		b = variable('b')
		c = variable('c')

		pairs = [
			(2 * a + 1, 11),
			(floor(a * a, 3) + b, 10),
			(max(a, b) * c - c + 4 * b, 32)
		]
		assert deduce_values(pairs) == {'a': 5, 'b': 2, 'c': 6}

		pairs = [(ceil(a, 2) * b + 3, 3 * 3 + 3), (a + 1, 6)]
		assert deduce_values(pairs) == {'a': 5, 'b': 3}

	def test_underdetermined():
		a = variable('a')
		b = variable('b')

		try:
			deduce_values([(a * b, 6)])
		except Underdetermined as error:
			assert error.identifiers == {'a', 'b'}
			assert error.equations == [(a * b, 6)]
			assert isinstance(error, DeductionError)
			assert isinstance(error, ArithmeticError)
		else:
			assert False

		try:
			deduce_values([(b, 2), (a + b, 5), (a * variable('c') * variable('d') + b, 9)])
		except Underdetermined as error:
			assert error.identifiers == {'c', 'd'}
			assert len(error.equations) == 1
		else:
			assert False

		try:
			deduce_values([(a * a, 9)])
		except Underdetermined as error:
			assert error.identifiers == {'a'}
		else:
			assert False

	def test_unresolved_logging():
		class Records(logging.Handler):
			def __init__(self):
				super().__init__()
				self.messages = []

			def emit(self, record):
				self.messages.append(record.getMessage())

		a = variable('a')
		b = variable('b')

		records = Records()
		level = logger.level
		logger.addHandler(records)
		try:
			for enabled in (logging.DEBUG, logging.WARNING):
				logger.setLevel(enabled)
				del records.messages[:]
				try:
					deduce_values([(a * b, 6)])
				except Underdetermined:
					pass
				else:
					assert False
				if enabled == logging.DEBUG:
					assert records.messages == ["unresolved equations: a·b = 6"], records.messages
				else:
					assert records.messages == []
		finally:
			logger.removeHandler(records)
			logger.setLevel(level)

	def test_inconsistent():
		a = variable('a')
		b = variable('b')

		try:
			deduce_values([(a, 3), (a + 1, 5)])
		except Inconsistent as error:
			assert error.equation == (a + 1, 5)
		else:
			assert False

		try:
			deduce_values([(2 * a, 5)])
		except Inconsistent as error:
			assert error.equation == (2 * a, 5)
		else:
			assert False

		try:
			deduce_values([(Polynomial(3), 4)])
		except Inconsistent:
			pass
		else:
			assert False

		try:
			deduce_values([(b, 0), (floor(6, b) + a, 4)])
		except Inconsistent as error:
			assert error.equation[1] == 4
		else:
			assert False

		try:
			deduce_values([(a, 1.5)])
		except TypeError:
			pass
		else:
			assert False

	def test_random_round_trip(verbose=False):
		rng = random.Random(314159)
		identifiers = 'abcdefg'

		for n in range(32):
			observed = dict((_id, rng.randrange(-50, 51)) for _id in identifiers)
			pairs = []
			for i, identifier in enumerate(identifiers):
				known = identifiers[:i] or 'a'
				rest = Polynomial.random(known, order=2, rng=rng) if i else Polynomial(rng.randrange(-5, 6))
				scale = rng.choice([-3, -2, -1, 1, 2, 3])
				polynomial = scale * variable(identifier) + rest
				if i >= 2 and rng.randrange(2):
					polynomial += max(variable(known[0]), variable(known[1]) + 1)
				pairs.append((polynomial, polynomial.eval(observed)))
			rng.shuffle(pairs)
			if verbose: print(" ", ", ".join(f"{_p} = {_v}" for (_p, _v) in pairs))

			assert deduce_values(pairs) == observed

	def deduction_test_suite(verbose=False):
		if verbose: print("running test suite")
		for test in (test_worked_example, test_trivial, test_composites, test_underdetermined, test_unresolved_logging, test_inconsistent):
			if verbose: print("", test.__name__)
			test()
		if verbose: print(" test_random_round_trip")
		test_random_round_trip(verbose)

	__all__ = __all__ + ('deduction_test_suite',)


if __debug__ and __name__ == '__main__':
	logging.basicConfig(level=logging.DEBUG)
	deduction_test_suite(verbose=True)
