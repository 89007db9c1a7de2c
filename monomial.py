#!/usr/bin/python3
#-*- coding:utf8 -*-

"Monomials: a coefficient times a product of powers of composite factors."

from numbers import Integral

from utils import Immutable, cached, sign, superscript
from rings import NotExactlyDivisible, coefficient as as_coefficient, power as as_power, checked_div as coefficient_checked_div, int_pow
from composite import Composite, DivisionByZero


__all__ = 'Monomial',


def merge_powers(first, second):
	"Multiply two power vectors: merge of two descending sorted association lists, powers of equal keys are summed."

	result = []
	i = j = 0
	while i < len(first) and j < len(second):
		order = first[i][0].compare(second[j][0])
		if order > 0:
			result.append(first[i])
			i += 1
		elif order < 0:
			result.append(second[j])
			j += 1
		else:
			result.append((first[i][0], first[i][1] + second[j][1]))
			i += 1
			j += 1
	result.extend(first[i:])
	result.extend(second[j:])
	return tuple(result)


def subtract_powers(dividend, divisor):
	"Divide two power vectors. Return `None` if some factor of `divisor` is missing from `dividend` or has a higher power."

	result = []
	i = 0
	for key, power in divisor:
		while True:
			if i >= len(dividend):
				return None
			order = dividend[i][0].compare(key)
			if order > 0:
				result.append(dividend[i])
				i += 1
			elif order < 0:
				return None
			else:
				break

		remaining = dividend[i][1] - power
		if remaining < 0:
			return None
		elif remaining > 0:
			result.append((key, remaining))
		i += 1

	result.extend(dividend[i:])
	return tuple(result)


class Monomial(Immutable):
	"""
	Monomial `coefficient · x₁ᵖ¹ · x₂ᵖ² · … · xₙᵖⁿ` where `xᵢ` are composites.
	The power vector is kept sorted in descending composite order, without duplicate keys and without zero powers.
	"""

	def __init__(self, coefficient=0, powers=()):
		"""
		Usage 1: `Monomial(monomial)` - copy the monomial.
		Usage 2: `Monomial(c)` - constant monomial.
		Usage 3: `Monomial(c, [(composite, power), ...])` - the powers may come in any order; repeated composites are multiplied.
		"""

		if isinstance(coefficient, Monomial):
			if powers:
				raise ValueError("Copying a monomial does not accept powers.")
			self.coefficient = coefficient.coefficient
			self.powers = coefficient.powers
			self.immutable = True
			return

		self.coefficient = as_coefficient(coefficient)

		result = ()
		for composite, power in powers:
			if not isinstance(composite, Composite):
				raise TypeError(f"Monomial factor must be a Composite, got {type(composite).__name__} instead.")
			power = as_power(power)
			if power:
				result = merge_powers(result, ((composite, power),))
		if self.coefficient == 0:
			result = ()
		self.powers = result
		self.immutable = True

	@classmethod
	def raw(cls, coefficient, powers):
		"Build a monomial from a power vector that is already canonical. No checks are done except for debug mode."
		assert all(_a[0].compare(_b[0]) > 0 for (_a, _b) in zip(powers, powers[1:])), "power vector not sorted"
		assert all(_p > 0 for (_c, _p) in powers), "zero power in power vector"
		result = cls.__new__(cls)
		object.__setattr__(result, 'coefficient', coefficient)
		object.__setattr__(result, 'powers', powers)
		object.__setattr__(result, 'immutable', True)
		return result

	@classmethod
	def var(cls, identifier):
		return cls.raw(1, ((Composite.var(identifier), 1),))

	def with_coefficient(self, coefficient):
		"The same monomial shape with a different coefficient."
		return self.raw(coefficient, self.powers)

	def up_to_coefficient(self, other):
		"Returns `True` if the two monomials are equal, ignoring their coefficients."
		return self.powers == other.powers

	def is_constant(self):
		"`True` only if the monomial does not depend on any composite."
		return not self.powers

	def eval(self, values=None):
		"Evaluate under the mapping `values`. Fails with the first missing identifier in factor order."

		if values is None:
			values = {}

		value = self.coefficient
		for composite, power in self.powers:
			value *= int_pow(composite.eval(values), power)
		return value

	def substitute(self, values):
		"Replace the identifiers found in `values` by their values. Returns a polynomial."

		from polynomial import Polynomial

		if not self.unique_identifiers() & frozenset(values):
			return Polynomial(self)

		result = Polynomial(self.coefficient)
		for composite, power in self.powers:
			result *= composite.substitute(values) ** power
		return result

	def unique_identifiers(self, unique=None):
		"Fills into the set `unique` all the identifiers used in this monomial."

		if unique is None:
			unique = set()
		for composite, power in self.powers:
			composite.unique_identifiers(unique)
		return unique

	def compare(self, other):
		"""
		Compare power vectors element by element (composite, then power). If one vector is a prefix
		of the other, the shorter one is smaller. Monomials of the same shape compare by coefficients.
		"""

		if isinstance(other, Integral):
			if self.is_constant():
				return sign(self.coefficient - other)
			else:
				return 1

		for (mine, my_power), (theirs, their_power) in zip(self.powers, other.powers):
			order = mine.compare(theirs)
			if order:
				return order
			if my_power != their_power:
				return sign(my_power - their_power)

		if len(self.powers) != len(other.powers):
			return sign(len(self.powers) - len(other.powers))

		return sign(self.coefficient - other.coefficient)

	def __eq__(self, other):
		if self is other:
			return True
		if isinstance(other, Integral):
			return self.is_constant() and self.coefficient == other
		if not isinstance(other, Monomial):
			return NotImplemented
		return self.coefficient == other.coefficient and self.up_to_coefficient(other)

	def __lt__(self, other):
		if not isinstance(other, (Monomial, Integral)):
			return NotImplemented
		return self.compare(other) < 0

	def __le__(self, other):
		if not isinstance(other, (Monomial, Integral)):
			return NotImplemented
		return self.compare(other) <= 0

	def __gt__(self, other):
		if not isinstance(other, (Monomial, Integral)):
			return NotImplemented
		return self.compare(other) > 0

	def __ge__(self, other):
		if not isinstance(other, (Monomial, Integral)):
			return NotImplemented
		return self.compare(other) >= 0

	@cached
	def __hash__(self):
		if self.is_constant():
			return hash(self.coefficient)
		return hash((self.coefficient, self.powers))

	def __bool__(self):
		return self.coefficient != 0

	def __pos__(self):
		return self

	def __neg__(self):
		return self.with_coefficient(-self.coefficient)

	def __mul__(self, other):
		if isinstance(other, Integral):
			if other == 0:
				return self.raw(self.coefficient * other, ())
			return self.with_coefficient(self.coefficient * other)
		elif isinstance(other, Monomial):
			coefficient = self.coefficient * other.coefficient
			if coefficient == 0:
				return self.raw(coefficient, ())
			return self.raw(coefficient, merge_powers(self.powers, other.powers))
		else:
			return NotImplemented

	__rmul__ = __mul__

	def __pow__(self, exponent):
		exponent = as_power(exponent)
		coefficient = int_pow(self.coefficient, exponent)
		return self.raw(coefficient, tuple((_c, _p * exponent) for (_c, _p) in self.powers) if exponent and coefficient else ())

	def checked_div(self, other):
		"If the monomial is divisible by `other` (monomial or integer) return the quotient, otherwise `None`."

		if isinstance(other, Integral):
			other = self.raw(other, ())
		elif not isinstance(other, Monomial):
			raise TypeError(f"Can not divide a monomial by {type(other).__name__}.")

		coefficient = coefficient_checked_div(self.coefficient, other.coefficient)
		if coefficient is None:
			return None
		if coefficient == 0:
			return self.raw(coefficient, ())

		powers = subtract_powers(self.powers, other.powers)
		if powers is None:
			return None

		return self.raw(coefficient, powers)

	def __truediv__(self, other):
		"Exact division. If the monomial is not divisible, raise an error."

		if not isinstance(other, (Monomial, Integral)):
			return NotImplemented
		if other == 0:
			raise DivisionByZero("Division of a monomial by zero.")

		result = self.checked_div(other)
		if result is None:
			raise NotExactlyDivisible(f"Monomial {self} is not divisible by {other}.")
		return result

	def __add__(self, other):
		from polynomial import Polynomial
		if not isinstance(other, (Monomial, Integral)):
			return NotImplemented
		return Polynomial(self) + other

	__radd__ = __add__

	def __sub__(self, other):
		from polynomial import Polynomial
		if not isinstance(other, (Monomial, Integral)):
			return NotImplemented
		return Polynomial(self) - other

	def __rsub__(self, other):
		from polynomial import Polynomial
		if not isinstance(other, (Monomial, Integral)):
			return NotImplemented
		return Polynomial(other) - self

	def __repr__(self):
		return self.__class__.__qualname__ + '(' + repr(self.coefficient) + ', [' + ', '.join('(' + repr(_c) + ', ' + repr(_p) + ')' for (_c, _p) in self.powers) + '])'

	@cached
	def __str__(self):
		if self.coefficient == 0:
			return "0"
		elif self.is_constant():
			return str(self.coefficient)

		factors = "·".join(str(_c) + (superscript(_p) if _p != 1 else "") for (_c, _p) in self.powers)

		if self.coefficient == 1:
			return factors
		elif self.coefficient == -1:
			return "-" + factors
		else:
			return f"{self.coefficient}·{factors}"

	def to_code(self, render=str):
		"Code representation with explicit operators; `render` turns an identifier into a string."

		if self.coefficient == 0:
			return "0"
		elif self.coefficient == 1 and self.is_constant():
			return "1"
		elif self.coefficient == -1 and self.is_constant():
			return "- 1"
		elif self.coefficient == -1:
			code = "- "
		elif self.coefficient < 0:
			code = f"- {-self.coefficient}"
		elif self.coefficient != 1:
			code = f"{self.coefficient}"
		else:
			code = ""

		first = True
		for composite, power in self.powers:
			if not first or (self.coefficient != 1 and self.coefficient != -1):
				code += " * "
			code += " * ".join([composite.to_code(render)] * power)
			first = False
		return code


if __debug__:
	from composite import MissingIdentifier

	def monomials():
		a = Monomial(1, [(Composite.var('a'), 1)])
		b = Monomial(1, [(Composite.var('b'), 1)])
		c = Monomial(1, [(Composite.var('c'), 1)])
		d = Monomial(1, [(Composite.var('d'), 1)])
		return a, b, c, d

	def test_constructor():
		a, b, c, d = monomials()
		minus_six = Monomial(-6)
		thirteen = Monomial(13)

		assert minus_six.is_constant()
		assert minus_six.coefficient == -6
		assert len(minus_six.powers) == 0

		assert thirteen.is_constant()
		assert thirteen.coefficient == 13
		assert len(thirteen.powers) == 0

		assert not a.is_constant()
		assert a.coefficient == 1
		assert a.powers == ((Composite.var('a'), 1),)
		assert a == Monomial.var('a')
		assert Monomial(a) == a

		unsorted = Monomial(2, [(Composite.var('b'), 1), (Composite.var('a'), 2), (Composite.var('b'), 2), (Composite.var('c'), 0)])
		assert unsorted.powers == ((Composite.var('a'), 2), (Composite.var('b'), 3))
		assert unsorted == 2 * a * a * b * b * b

		try:
			Monomial(1.5)
		except TypeError:
			pass
		else:
			assert False

		try:
			Monomial(1, [(Composite.var('a'), -1)])
		except ValueError:
			pass
		else:
			assert False

		try:
			Monomial(1, [('a', 1)])
		except TypeError:
			pass
		else:
			assert False

		try:
			a.coefficient = 5
		except TypeError:
			pass
		else:
			assert False

	def test_up_to_coefficient():
		a, b, c, d = monomials()
		three = Monomial(3)
		five = Monomial(5)
		a_times_2 = 2 * a
		minus_5_a = -5 * a
		a_square = a * a
		a_square_times_3 = 3 * a_square

		assert not a.up_to_coefficient(three)
		assert not three.up_to_coefficient(a)
		assert not b.up_to_coefficient(five)
		assert not a.up_to_coefficient(b)
		assert not b.up_to_coefficient(a)

		assert five.up_to_coefficient(three)
		assert three.up_to_coefficient(five)
		assert a.up_to_coefficient(a_times_2)
		assert a_times_2.up_to_coefficient(minus_5_a)
		assert minus_5_a.up_to_coefficient(a)

		assert not a_times_2.up_to_coefficient(three)
		assert not a_square.up_to_coefficient(a)
		assert not a.up_to_coefficient(a_square)
		assert not a_square.up_to_coefficient(minus_5_a)
		assert a_square.up_to_coefficient(a_square_times_3)
		assert a_square_times_3.up_to_coefficient(a_square)

	def test_equality():
		a, b, c, d = monomials()
		a_square_v1 = Monomial(1, [(Composite.var('a'), 2)])
		a_square_v2 = Monomial(1, [(Composite.var('a'), 2)])
		two_a_square = Monomial(2, [(Composite.var('a'), 2)])
		b_square = b * b

		assert a != 3
		assert 3 != a
		assert Monomial(3) == 3
		assert 3 == Monomial(3)
		assert Monomial(0) == 0
		assert hash(Monomial(3)) == hash(3)
		assert a == Monomial.var('a')

		assert a_square_v1 == a_square_v2
		assert hash(a_square_v1) == hash(a_square_v2)
		assert two_a_square != a_square_v1
		assert a_square_v1 != two_a_square
		assert a_square_v1 != b_square
		assert b_square != a_square_v1

		assert len({a_square_v1, a_square_v2, two_a_square}) == 2

	def test_ordering():
		a, b, c, d = monomials()
		a_square_b_times_2 = Monomial(2, [(Composite.var('a'), 2), (Composite.var('b'), 1)])
		a_square_b_times_3 = Monomial(3, [(Composite.var('a'), 2), (Composite.var('b'), 1)])
		ab_times_2 = Monomial(2, [(Composite.var('a'), 1), (Composite.var('b'), 1)])

		assert a > 2
		assert 2 < a
		assert b > 2
		assert 2 < b
		assert Monomial(3) > 2
		assert Monomial(-3) < 2

		assert a > b
		assert b < a
		assert a * a > a
		assert a > b * b
		assert a * b > a
		assert a_square_b_times_3 > a_square_b_times_2
		assert a_square_b_times_2 < a_square_b_times_3
		assert a_square_b_times_3 > ab_times_2
		assert ab_times_2 < a_square_b_times_3
		assert a_square_b_times_2 > ab_times_2
		assert ab_times_2 < a_square_b_times_2
		assert a <= a and a >= a

	def test_multiplication():
		a, b, c, d = monomials()
		abc_times_2 = 2 * a * b * c
		b_square = b * b
		ab_third_c_times_2 = b_square * abc_times_2

		assert abc_times_2.coefficient == 2
		assert not abc_times_2.is_constant()
		assert abc_times_2.powers == ((Composite.var('a'), 1), (Composite.var('b'), 1), (Composite.var('c'), 1))

		assert b_square.coefficient == 1
		assert b_square.powers == ((Composite.var('b'), 2),)

		assert ab_third_c_times_2.coefficient == 2
		assert ab_third_c_times_2.powers == ((Composite.var('a'), 1), (Composite.var('b'), 3), (Composite.var('c'), 1))

		assert c * b * a == a * b * c
		assert (a * b) * c == a * (b * c)
		assert a * 0 == 0
		assert (a * 0).is_constant()
		assert a ** 3 == a * a * a
		assert (2 * a) ** 2 == 4 * a * a
		assert a ** 0 == 1

	def test_division():
		a, b, c, d = monomials()
		a_square = a * a
		b_square = b * b
		c_square = c * c
		abc_times_2 = 2 * a * b * c
		ab = a * b
		ac = a * c
		bc = b * c

		abc = abc_times_2 / 2
		assert abc.coefficient == 1
		assert abc.powers == ((Composite.var('a'), 1), (Composite.var('b'), 1), (Composite.var('c'), 1))

		bc2 = abc_times_2 / a
		assert bc2.coefficient == 2
		assert bc2.powers == ((Composite.var('b'), 1), (Composite.var('c'), 1))

		ac2 = abc_times_2 / b
		assert ac2.coefficient == 2
		assert ac2.powers == ((Composite.var('a'), 1), (Composite.var('c'), 1))

		ab2 = abc_times_2 / c
		assert ab2.coefficient == 2
		assert ab2.powers == ((Composite.var('a'), 1), (Composite.var('b'), 1))

		two = abc_times_2 / b / c / a
		assert two.coefficient == 2
		assert two.powers == ()

		assert abc_times_2 / ab == 2 * c
		assert abc_times_2 / ac == 2 * b
		assert abc_times_2 / bc == 2 * a
		assert (a_square * b) / a == ab

		assert abc_times_2.checked_div(4) is None
		assert abc_times_2.checked_div(0) is None
		assert abc_times_2.checked_div(a_square) is None
		assert abc_times_2.checked_div(b_square) is None
		assert abc_times_2.checked_div(c_square) is None
		assert abc_times_2.checked_div(d) is None
		assert Monomial(0).checked_div(a) == 0

		try:
			abc_times_2 / d
		except NotExactlyDivisible:
			pass
		else:
			assert False

		try:
			abc_times_2 / 0
		except ZeroDivisionError:
			pass
		else:
			assert False

	def test_addition():
		a, b, c, d = monomials()

		a_plus_b = a + b
		assert len(a_plus_b.monomials) == 2
		assert a_plus_b.monomials[0] == a
		assert a_plus_b.monomials[1] == b
		assert b + a == a_plus_b

		a_plus_two_b = a_plus_b + b
		assert len(a_plus_two_b.monomials) == 2
		assert a_plus_two_b.monomials[0] == a
		assert a_plus_two_b.monomials[1] == 2 * b

		a_plus_b_twice = a_plus_two_b + a
		assert a_plus_b_twice.monomials[0] == 2 * a
		assert a_plus_b_twice.monomials[1] == 2 * b

		assert len((a + a).monomials) == 1
		assert (a + a).monomials[0] == 2 * a
		assert len((a_plus_b - a_plus_b).monomials) == 0
		assert len((a + (-a)).monomials) == 0
		assert (a + 0).monomials == (a,)
		assert len((Monomial(3) + (-3)).monomials) == 0

	def test_subtraction():
		a, b, c, d = monomials()

		a_minus_b = a - b
		assert len(a_minus_b.monomials) == 2
		assert a_minus_b.monomials[0] == a
		assert a_minus_b.monomials[1] == -b

		a_minus_two_b = a_minus_b - b
		assert len(a_minus_two_b.monomials) == 2
		assert a_minus_two_b.monomials[0] == a
		assert a_minus_two_b.monomials[1] == -2 * b

		a_v2 = a_minus_two_b + 2 * b
		assert len(a_v2.monomials) == 1
		assert a_v2.monomials[0] == a

		zero = a_v2 + (-a)
		assert len(zero.monomials) == 0

		assert (1 - a).monomials == (-a, Monomial(1))
		assert (b - a).monomials == (-a, b)

	def test_evaluation():
		a, b, c, d = monomials()

		values = {'a': 3, 'b': 7, 'c': 5}

		assert a.eval(values) == 3
		assert b.eval(values) == 7
		assert c.eval(values) == 5
		assert Monomial(4).eval() == 4

		try:
			d.eval(values)
		except MissingIdentifier as error:
			assert error.identifier == 'd'
			assert str(error) == "Value not provided for d."
		else:
			assert False

		assert (a * 2 * a).eval(values) == 18
		assert (a * 2 * b).eval(values) == 42
		assert (c * a * b).eval(values) == 105

		try:
			(d * c * a * b).eval(values)
		except MissingIdentifier as error:
			assert error.identifier == 'd'
		else:
			assert False

		assert (a + b + c + 2).eval(values) == 17
		try:
			(a + b + c + d).eval(values)
		except MissingIdentifier as error:
			assert error.identifier == 'd'
		else:
			assert False

	def test_rendering():
		a, b, c, d = monomials()

		assert str(Monomial(0)) == "0"
		assert str(Monomial(-4)) == "-4"
		assert str(a) == "a"
		assert str(-a) == "-a"
		assert str(3 * a * a * b) == "3·a²·b"
		assert str(-3 * a * b) == "-3·a·b"

		assert Monomial(0).to_code() == "0"
		assert Monomial(1).to_code() == "1"
		assert Monomial(-1).to_code() == "- 1"
		assert Monomial(7).to_code() == "7"
		assert Monomial(-7).to_code() == "- 7"
		assert a.to_code() == "a"
		assert (-a).to_code() == "- a"
		assert (5 * a * a * b).to_code() == "5 * a * a * b"
		assert (-5 * a * b).to_code() == "- 5 * a * b"
		assert (a * a * b).to_code(lambda _id: 'v_' + _id) == "v_a * v_a * v_b"

		assert repr(a) == "Monomial(1, [(Composite(var, ['a']), 1)])"
		assert a.unique_identifiers() == {'a'}
		assert (a * b * b).unique_identifiers() == {'a', 'b'}
		assert Monomial(5).unique_identifiers() == set()

	def test_substitution():
		a, b, c, d = monomials()
		from polynomial import Polynomial

		assert (3 * a * b).substitute({'a': 2}) == 6 * b
		assert (3 * a * b).substitute({'a': 2, 'b': 5}) == 30
		assert (3 * a * b).substitute({'c': 1}) == Polynomial(3 * a * b)
		assert (a * a).substitute({'a': -3}) == 9


if __debug__ and __name__ == '__main__':
	test_constructor()
	test_up_to_coefficient()
	test_equality()
	test_ordering()
	test_multiplication()
	test_division()
	test_addition()
	test_subtraction()
	test_evaluation()
	test_rendering()
	test_substitution()
