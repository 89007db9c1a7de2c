#!/usr/bin/python3
#-*- coding:utf8 -*-

"Symbolic factors of monomials: variables and floor, ceil, min, max of two polynomials."

from enum import Enum

from utils import Immutable, cached, sign
from rings import floor_div, ceil_div


__all__ = 'Composite', 'EvaluationError', 'MissingIdentifier', 'DivisionByZero'


class EvaluationError(Exception):
	"Base class of errors raised while evaluating an expression."


class MissingIdentifier(EvaluationError, LookupError):
	"Evaluation reached a variable that has no value in the provided mapping."

	def __init__(self, identifier):
		super().__init__(f"Value not provided for {identifier}.")
		self.identifier = identifier


class DivisionByZero(EvaluationError, ZeroDivisionError):
	"The divisor of a floor or ceil evaluated to zero, or a polynomial was divided by the zero polynomial."

	def __init__(self, message="Attempting division by zero."):
		super().__init__(message)


class Composite(Immutable):
	"""
	A factor of a monomial. Either a variable (`symbol.var`, operand: the identifier) or one of the
	binary operations `floor`, `ceil`, `min`, `max` over two polynomials (operands: left and right).

	Composites are immutable and their polynomial operands are shared, never copied. Do not use
	the binary forms directly; `polynomial.floor` and friends fold constant operands first.
	"""

	symbol = Enum('Composite.symbol', 'var floor ceil min max')

	def __init__(self, operator, operands):
		"""
		Usage 1: `Composite(Composite.symbol.var, [identifier])`
		Usage 2: `Composite(Composite.symbol.floor, [left, right])` (also `ceil`, `min`, `max`); raw initialization, no folding.
		"""

		if not isinstance(operator, self.symbol):
			raise ValueError(f"Wrong operator: {repr(operator)}")

		operands = tuple(operands)
		if operator == self.symbol.var:
			if len(operands) != 1:
				raise ValueError("Variable needs exactly one identifier.")
			hash(operands[0])
		else:
			if len(operands) != 2:
				raise ValueError(f"Composite `{operator.name}` needs exactly two operands.")
			if not all(hasattr(_operand, 'monomials') for _operand in operands):
				raise TypeError(f"Operands of `{operator.name}` must be polynomials.")

		self.c_operator = operator
		self.c_operands = operands
		self.immutable = True

	@classmethod
	def var(cls, identifier):
		return cls(cls.symbol.var, [identifier])

	def is_var(self):
		return self.c_operator == self.symbol.var

	@property
	def identifier(self):
		"The identifier of a variable."
		if self.is_var():
			return self.c_operands[0]
		else:
			raise ValueError(f"Composite `{self.c_operator.name}` has no identifier.")

	@property
	def left(self):
		if self.is_var():
			raise ValueError("Variable has no operands.")
		return self.c_operands[0]

	@property
	def right(self):
		if self.is_var():
			raise ValueError("Variable has no operands.")
		return self.c_operands[1]

	def eval(self, values):
		"Evaluate under the mapping `values` (identifier -> integer). The left operand is evaluated before the right one."

		if self.is_var():
			try:
				return values[self.identifier]
			except KeyError:
				raise MissingIdentifier(self.identifier) from None

		left = self.left.eval(values)
		right = self.right.eval(values)

		if self.c_operator == self.symbol.floor:
			if right == 0:
				raise DivisionByZero
			return floor_div(left, right)
		elif self.c_operator == self.symbol.ceil:
			if right == 0:
				raise DivisionByZero
			return ceil_div(left, right)
		elif self.c_operator == self.symbol.min:
			return left if left <= right else right
		elif self.c_operator == self.symbol.max:
			return left if left >= right else right
		else:
			raise RuntimeError

	def substitute(self, values):
		"Replace the variables present in `values` and fold what became constant. Returns a polynomial."

		from polynomial import Polynomial, variable, composite_constructor

		if self.is_var():
			if self.identifier in values:
				return Polynomial(values[self.identifier])
			else:
				return variable(self.identifier)

		return composite_constructor(self.c_operator)(self.left.substitute(values), self.right.substitute(values))

	def unique_identifiers(self, unique=None):
		"Collect the identifiers this composite depends on into the set `unique`."

		if unique is None:
			unique = set()

		if self.is_var():
			unique.add(self.identifier)
		else:
			for operand in self.c_operands:
				operand.unique_identifiers(unique)
		return unique

	def compare(self, other):
		"""
		Total order: first by kind (`var` < `floor` < `ceil` < `min` < `max`), then structurally.
		Variables order by their identifiers reversed, so that `a` ranks above `b` and leads in canonical order.
		"""

		if self.c_operator != other.c_operator:
			return sign(self.c_operator.value - other.c_operator.value)

		if self.is_var():
			a = self.identifier
			b = other.identifier
			if a == b:
				return 0
			return 1 if a < b else -1

		for mine, theirs in zip(self.c_operands, other.c_operands):
			order = mine.compare(theirs)
			if order:
				return order
		return 0

	def __eq__(self, other):
		if self is other:
			return True
		try:
			return self.c_operator == other.c_operator and self.c_operands == other.c_operands
		except AttributeError:
			return NotImplemented

	def __lt__(self, other):
		if not isinstance(other, Composite):
			return NotImplemented
		return self.compare(other) < 0

	def __le__(self, other):
		if not isinstance(other, Composite):
			return NotImplemented
		return self.compare(other) <= 0

	def __gt__(self, other):
		if not isinstance(other, Composite):
			return NotImplemented
		return self.compare(other) > 0

	def __ge__(self, other):
		if not isinstance(other, Composite):
			return NotImplemented
		return self.compare(other) >= 0

	@cached
	def __hash__(self):
		return hash((self.c_operator, self.c_operands))

	def __repr__(self):
		return self.__class__.__qualname__ + '(' + self.c_operator.name + ', [' + ', '.join(repr(_operand) for _operand in self.c_operands) + '])'

	@cached
	def __str__(self):
		if self.is_var():
			return str(self.identifier)
		else:
			return f"{self.c_operator.name}({self.left}, {self.right})"

	def to_code(self, render=str):
		"Code representation; `render` turns an identifier into a string."
		if self.is_var():
			return render(self.identifier)
		else:
			return f"{self.c_operator.name}({self.left.to_code(render)}, {self.right.to_code(render)})"


if __debug__:
	def test_variable():
		a = Composite.var('a')
		b = Composite.var('b')

		assert a.is_var()
		assert a.identifier == 'a'
		assert a == Composite.var('a')
		assert a != b
		assert hash(a) == hash(Composite.var('a'))

		assert a > b
		assert b < a
		assert a >= a and a <= a
		assert a.compare(a) == 0

		assert str(a) == 'a'
		assert a.to_code(lambda _id: _id.upper()) == 'A'
		assert repr(a) == "Composite(var, ['a'])"
		assert a.unique_identifiers() == {'a'}

		assert a.eval({'a': 4, 'b': 1}) == 4
		try:
			b.eval({'a': 4})
		except MissingIdentifier as error:
			assert error.identifier == 'b'
			assert isinstance(error, LookupError)
		else:
			assert False

		try:
			a.identifier = 'c'
		except TypeError:
			pass
		else:
			assert False

		try:
			a.left
		except ValueError:
			pass
		else:
			assert False

	def test_malformed():
		try:
			Composite('var', ['a'])
		except ValueError:
			pass
		else:
			assert False

		try:
			Composite(Composite.symbol.var, ['a', 'b'])
		except ValueError:
			pass
		else:
			assert False

		try:
			Composite(Composite.symbol.floor, [1, 2])
		except TypeError:
			pass
		else:
			assert False

	def test_binary():
		from polynomial import Polynomial, variable

		a = variable('a')
		b = variable('b')

		f = Composite(Composite.symbol.floor, [a, b])
		c = Composite(Composite.symbol.ceil, [a, b])
		m = Composite(Composite.symbol.min, [a, b])
		n = Composite(Composite.symbol.max, [a, b])

		assert f.left is a
		assert f.right is b
		assert str(f) == 'floor(a, b)'
		assert n.to_code() == 'max(a, b)'
		assert f.unique_identifiers() == {'a', 'b'}

		assert Composite.var('z') < f < c < m < n
		assert Composite(Composite.symbol.floor, [a, b]) == f
		assert Composite(Composite.symbol.floor, [b, a]) != f
		assert Composite(Composite.symbol.floor, [a, b]) > Composite(Composite.symbol.floor, [b, a])
		assert Composite(Composite.symbol.floor, [a, a]) > Composite(Composite.symbol.floor, [a, b])

		values = {'a': -7, 'b': 2}
		assert f.eval(values) == -4
		assert c.eval(values) == -3
		assert m.eval(values) == -7
		assert n.eval(values) == 2

		try:
			f.eval({'a': 1, 'b': 0})
		except DivisionByZero:
			pass
		else:
			assert False

		try:
			c.eval({'a': 1, 'b': 0})
		except ZeroDivisionError:
			pass
		else:
			assert False

		assert m.eval({'a': 1, 'b': 0}) == 0

		try:
			f.eval({'b': 0})
		except MissingIdentifier as error:
			assert error.identifier == 'a'
		else:
			assert False

		assert f.substitute({'a': 9, 'b': 2}) == Polynomial(4)
		assert c.substitute({'a': 9, 'b': 2}) == 5
		assert n.substitute({'b': 2}) == Polynomial(Composite(Composite.symbol.max, [a, Polynomial(2)]))
		assert Composite.var('a').substitute({'b': 2}) == a


if __debug__ and __name__ == '__main__':
	test_variable()
	test_malformed()
	test_binary()
