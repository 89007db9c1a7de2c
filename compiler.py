#!/usr/bin/python3
#-*- coding:utf8 -*-

"Native compilation of polynomials through LLVM."

import logging
import ctypes

import llvmlite.ir
import llvmlite.binding

from composite import Composite, MissingIdentifier, DivisionByZero


__all__ = 'Compiler', 'Code', 'CompiledPolynomial'


logger = logging.getLogger(__name__)


compiler_initialized = False


def initialize_compiler():
	"Initialize the LLVM compiler."

	global compiler_initialized
	llvmlite.binding.initialize_native_target()
	llvmlite.binding.initialize_native_asmprinter()
	compiler_initialized = True


c_types = {8: ctypes.c_int8, 16: ctypes.c_int16, 32: ctypes.c_int32, 64: ctypes.c_int64}


class Emitter:
	"Emits LLVM instructions evaluating a polynomial. Values of composites are computed once per function."

	def __init__(self, builder, values, identifiers, type_):
		self.builder = builder
		self.values = values
		self.index = dict((_id, _n) for (_n, _id) in enumerate(identifiers))
		self.type_ = type_
		self.status = llvmlite.ir.IntType(32)
		self.computed = {}

	def constant(self, n):
		"Integer constant, wrapped around to the native width."
		bits = self.type_.width
		n &= (1 << bits) - 1
		if n >> (bits - 1):
			n -= 1 << bits
		return self.type_(n)

	def polynomial(self, polynomial):
		builder = self.builder
		total = None
		for monomial in polynomial.monomials:
			term = self.monomial(monomial)
			total = term if total is None else builder.add(total, term)
		return total if total is not None else self.constant(0)

	def monomial(self, monomial):
		builder = self.builder
		value = None if monomial.coefficient == 1 else self.constant(monomial.coefficient)
		for composite, power in monomial.powers:
			factor = self.power(self.composite(composite), power)
			value = factor if value is None else builder.mul(value, factor)
		return value if value is not None else self.constant(1)

	def power(self, base, exponent):
		builder = self.builder
		result = None
		while exponent:
			if exponent & 1:
				result = base if result is None else builder.mul(result, base)
			exponent >>= 1
			if exponent:
				base = builder.mul(base, base)
		return result

	def composite(self, composite):
		try:
			return self.computed[composite]
		except KeyError:
			pass

		builder = self.builder

		if composite.is_var():
			pointer = builder.gep(self.values, [llvmlite.ir.IntType(32)(self.index[composite.identifier])], inbounds=True)
			value = builder.load(pointer)

		else:
			left = self.polynomial(composite.left)
			right = self.polynomial(composite.right)

			if composite.c_operator in (Composite.symbol.floor, Composite.symbol.ceil):
				zero = self.constant(0)
				with builder.if_then(builder.icmp_signed('==', right, zero), likely=False):
					builder.ret(self.status(0))

				quotient = builder.sdiv(left, right)
				remainder = builder.srem(left, right)
				inexact = builder.icmp_signed('!=', remainder, zero)
				opposite = builder.icmp_signed('<', builder.xor(remainder, right), zero)
				if composite.c_operator == Composite.symbol.floor:
					value = builder.sub(quotient, builder.zext(builder.and_(inexact, opposite), self.type_))
				else:
					value = builder.add(quotient, builder.zext(builder.and_(inexact, builder.not_(opposite)), self.type_))

			elif composite.c_operator == Composite.symbol.min:
				value = builder.select(builder.icmp_signed('<=', left, right), left, right)
			elif composite.c_operator == Composite.symbol.max:
				value = builder.select(builder.icmp_signed('>=', left, right), left, right)
			else:
				raise RuntimeError

		self.computed[composite] = value
		return value


class CompiledPolynomial:
	"""
	Native function evaluating a polynomial. Call with a mapping of identifiers to values, like `Polynomial.eval`.
	If an identifier is missing, the polynomial is evaluated in Python so that the error is the one `eval` raises.
	"""

	def __init__(self, name, address, identifiers, polynomial, bits, code):
		self.__name__ = name
		self.polynomial = polynomial
		self.identifiers = identifiers
		self.c_type = c_types[bits]
		self.code = code
		self.function = ctypes.CFUNCTYPE(ctypes.c_int32, ctypes.POINTER(self.c_type), ctypes.POINTER(self.c_type))(address)

	def __call__(self, values=None, **kwargs):
		if values is None:
			values = {}
		if kwargs:
			values = dict(values)
			values.update(kwargs)

		missing = [_id for _id in self.identifiers if _id not in values]
		if missing:
			self.polynomial.eval(values)
			raise MissingIdentifier(missing[0])

		arguments = (self.c_type * len(self.identifiers))()
		for n, identifier in enumerate(self.identifiers):
			arguments[n] = values[identifier]

		result = self.c_type()
		if not self.function(arguments, ctypes.byref(result)):
			raise DivisionByZero
		return result.value

	def __repr__(self):
		return f"<{self.__class__.__qualname__} {self.__name__}({', '.join(str(_id) for _id in self.identifiers)})>"


class Code:
	"Native code from the LLVM compiler. Compiled polynomials are available under the attribute `symbol`."

	def __init__(self, compiler):
		if not compiler_initialized:
			initialize_compiler()
		target = llvmlite.binding.Target.from_default_triple()
		target_machine = target.create_target_machine()
		backing_mod = llvmlite.binding.parse_assembly("")
		self.engine = llvmlite.binding.create_mcjit_compiler(backing_mod, target_machine)

		ll_module = llvmlite.binding.parse_assembly(str(compiler.module))
		ll_module.verify()
		self.engine.add_module(ll_module)
		self.engine.finalize_object()
		logger.debug("finalized native module `%s` with %d function(s)", compiler.module.name, len(compiler.defined_functions))

		self.symbol = {}
		for name, (function, identifiers, polynomial) in compiler.defined_functions.items():
			address = self.engine.get_function_address(name)
			self.symbol[name] = CompiledPolynomial(name, address, identifiers, polynomial, compiler.bits, self)

	def __enter__(self):
		self.engine.run_static_constructors()
		return self

	def __exit__(self, *arg):
		self.engine.run_static_destructors()


class Compiler:
	"Collects native functions evaluating polynomials into one LLVM module."

	bits = 64

	def __init__(self, name=''):
		if self.bits not in c_types:
			raise ValueError(f"Unsupported integer width: {self.bits}.")
		self.module = llvmlite.ir.Module(name=name)
		self.module.triple = llvmlite.binding.get_process_triple()
		self.defined_functions = {}

	def polynomial(self, name, polynomial):
		"""
		Emit `i32 name(iN* values, iN* result)`. `values` holds the polynomial's identifiers in sorted order.
		Returns 1 and stores the value into `result`, or returns 0 if the divisor of a floor or ceil is zero.
		"""

		if name in self.defined_functions:
			raise ValueError(f"Function `{name}` already defined.")

		identifiers = sorted(polynomial.unique_identifiers())
		type_ = llvmlite.ir.IntType(self.bits)
		status = llvmlite.ir.IntType(32)
		functype = llvmlite.ir.FunctionType(status, [type_.as_pointer(), type_.as_pointer()])
		function = llvmlite.ir.Function(self.module, functype, name=name)
		values, result = function.args

		builder = llvmlite.ir.IRBuilder(function.append_basic_block())
		emitter = Emitter(builder, values, identifiers, type_)
		builder.store(emitter.polynomial(polynomial), result)
		builder.ret(status(1))

		self.defined_functions[name] = function, identifiers, polynomial
		logger.debug("emitted native function %s(%s) = %s", name, ", ".join(str(_id) for _id in identifiers), polynomial)
		return function

	def __str__(self):
		"LLVM assembler representation of the code compiled so far."
		return str(self.module)

	def compile(self):
		"Compile the LLVM module to native code."
		return Code(self)


if __debug__:
	import random
	from polynomial import Polynomial, variable, floor, ceil, min, max

	def test_worked_example():
		a = variable('a')
		b = variable('b')
		c = variable('c')

		polynomials = {
			'linear': 5 * b + 2,
			'product': a * b,
			'sum': a * b + a * c + b + c,
			'difference': a * a - a * b + 12,
			'floor': floor(a * a, b * b),
			'ceil': ceil(a * a, b * b),
			'nested': max(floor(a * a, b) - 2, ceil(c, b) + 1),
			'minimum': min(a * b + 12, a * b + a),
			'constant': Polynomial(-7),
			'zero': Polynomial(0)
		}

		compiler = Compiler()
		for name, polynomial in polynomials.items():
			polynomial.compile(name, compiler)
		assert 'nested' in str(compiler)

		try:
			compiler.polynomial('linear', a)
		except ValueError:
			pass
		else:
			assert False

		code = compiler.compile()
		with code:
			values = {'a': 3, 'b': 2, 'c': 5}
			for name, polynomial in polynomials.items():
				assert code.symbol[name](values) == polynomial.eval(values), name

			assert code.symbol['linear'](b=2) == 12
			assert code.symbol['constant']() == -7
			assert code.symbol['zero']() == 0
			assert code.symbol['nested'].identifiers == ['a', 'b', 'c']

			wrapped = polynomials['sum'].wrap_compiled('sum', code)
			assert wrapped(a=5, b=3, c=8) == 66
			assert wrapped({'a': 5}, b=3, c=8) == 66

			try:
				code.symbol['floor'](a=3, b=0)
			except DivisionByZero:
				pass
			else:
				assert False

			try:
				code.symbol['product'](a=3)
			except MissingIdentifier as error:
				assert error.identifier == 'b'
			else:
				assert False

	def test_error_order():
		a = variable('a')
		b = variable('b')
		z = variable('z')

		mixed = floor(a, b) + z
		late = z * z + floor(a, b)

		compiler = Compiler()
		mixed.compile('mixed', compiler)
		late.compile('late', compiler)
		code = compiler.compile()

		with code:
			for name, polynomial in (('mixed', mixed), ('late', late)):
				for values in ({'a': 3, 'b': 0}, {'a': 3}, {'b': 0, 'z': 1}, {'a': 3, 'b': 0, 'z': 1}):
					try:
						polynomial.eval(values)
					except (MissingIdentifier, DivisionByZero) as error:
						expected = error
					else:
						assert False

					try:
						code.symbol[name](values)
					except (MissingIdentifier, DivisionByZero) as error:
						assert type(error) is type(expected), (name, values)
						assert getattr(error, 'identifier', None) == getattr(expected, 'identifier', None)
					else:
						assert False

			assert code.symbol['mixed'](a=7, b=2, z=1) == 4

	def test_rounding():
		a = variable('a')
		b = variable('b')

		compiler = Compiler()
		floor(a, b).compile('floor', compiler)
		ceil(a, b).compile('ceil', compiler)
		code = compiler.compile()

		with code:
			for x in range(-12, 13):
				for y in range(-5, 6):
					if y == 0:
						continue
					assert code.symbol['floor'](a=x, b=y) == x // y, (x, y)
					assert code.symbol['ceil'](a=x, b=y) == -(-x // y), (x, y)

	def test_random_agreement(verbose=False):
		rng = random.Random(271828)
		identifiers = 'abcd'

		compiler = Compiler()
		polynomials = {}
		for n in range(24):
			x = Polynomial.random(identifiers, order=3, rng=rng)
			y = Polynomial.random(identifiers, order=2, rng=rng)
			divisor = x - 1
			if divisor.is_constant():
				divisor += variable('a')
			kind = rng.choice([floor, ceil, min, max])
			p = x * kind(y, divisor) + y
			if verbose: print(" ", p)
			p.compile(f"p{n}", compiler)
			polynomials[f"p{n}"] = p

		code = compiler.compile()
		with code:
			for name, p in polynomials.items():
				for m in range(16):
					values = dict((_id, rng.randrange(-30, 31)) for _id in identifiers)
					try:
						expected = p.eval(values)
					except DivisionByZero:
						try:
							code.symbol[name](values)
						except DivisionByZero:
							pass
						else:
							assert False
					else:
						assert code.symbol[name](values) == expected

	def compiler_test_suite(verbose=False):
		if verbose: print("running test suite")
		if verbose: print(" test_worked_example")
		test_worked_example()
		if verbose: print(" test_error_order")
		test_error_order()
		if verbose: print(" test_rounding")
		test_rounding()
		if verbose: print(" test_random_agreement")
		test_random_agreement(verbose)

	__all__ = __all__ + ('compiler_test_suite',)


if __debug__ and __name__ == '__main__':
	logging.basicConfig(level=logging.DEBUG)
	compiler_test_suite(verbose=True)
