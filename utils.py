#!/usr/bin/python3
#-*- coding:utf8 -*-


__all__ = 'Immutable', 'superscript', 'cached', 'sign'


superscripts = str.maketrans("0123456789", "⁰¹²³⁴⁵⁶⁷⁸⁹")

def superscript(n):
	if not n >= 0: raise ValueError
	return str(n).translate(superscripts)


def sign(n):
	"Return -1, 0 or 1 according to the sign of `n`."
	return (n > 0) - (n < 0)


class Immutable:
	"Objects that can not be modified once the attribute `immutable` is set. Caches created by `cached` are exempt."

	def __setattr__(self, attr, value):
		if getattr(self, 'immutable', False) and not attr.startswith('_cached_'):
			raise TypeError(f"Could not set attribute `{attr}` on immutable object {self.__class__.__qualname__}.")
		object.__setattr__(self, attr, value)

	def __delattr__(self, attr):
		if getattr(self, 'immutable', False):
			raise TypeError(f"Could not delete attribute `{attr}` from immutable object {self.__class__.__qualname__}.")
		object.__delattr__(self, attr)


def cached(old_method):
	name = '_cached_' + old_method.__name__

	def new_method(self, *args):
		try:
			return getattr(self, name)[args]
		except AttributeError:
			value = old_method(self, *args)
			setattr(self, name, {args: value})
			return value
		except KeyError:
			value = old_method(self, *args)
			getattr(self, name)[args] = value
			return value

	new_method.__name__ = old_method.__name__
	new_method.__qualname__ = old_method.__qualname__
	new_method.__doc__ = old_method.__doc__
	return new_method


if __debug__:
	def test_superscript():
		assert superscript(0) == "⁰"
		assert superscript(12) == "¹²"
		try:
			superscript(-1)
		except ValueError:
			pass
		else:
			assert False

	def test_sign():
		assert sign(-7) == -1
		assert sign(0) == 0
		assert sign(3) == 1

	def test_immutable():
		class Point(Immutable):
			def __init__(self, x):
				self.x = x
				self.immutable = True

			@cached
			def double(self):
				return 2 * self.x

		p = Point(3)
		assert p.x == 3
		assert p.double() == 6
		assert p.double() == 6

		try:
			p.x = 4
		except TypeError:
			pass
		else:
			assert False

		try:
			del p.x
		except TypeError:
			pass
		else:
			assert False

		assert p.x == 3


if __debug__ and __name__ == '__main__':
	test_superscript()
	test_sign()
	test_immutable()
