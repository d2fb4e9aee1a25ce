"""
Patterns over sequences of tokens, rather than over strings of characters.

The structural passes of the tokenizers want to say things like "a comment token, then a
macro-header token, then a line-break, then one or more body lines". One way to get that is
to spell each token's kind as a character and run a regex over the resulting string. That
works, but the grammar then lives in a string nobody can type-check, and the offsets
only line up with the token list by convention.

Here the same idea is expressed with a few combinators that operate on the tokens directly.
Every token is expected to expose a one-character `kind`. The matching discipline is exactly
that of a backtracking regex engine: alternatives are tried in order, greedy repetition
tries the long way first, lazy repetition tries the short way first, and the first complete
match anchored at the leftmost possible position wins. `finditer` supplies leftmost
non-overlapping matches, so these patterns plug into the chunker just like `re` patterns.

A string given where a pattern is expected means the sequence of its characters, each
matching one token of that kind. So `seq('CSR', lazy_star(ANY), 'CGR')` is the token-level
reading of the regex /CSR.*?CGR/.
"""

from typing import Iterator, Optional, Sequence

def kinds(tokens) -> str:
	""" The kind projection: one character per token. Mainly useful in tests and diagnostics. """
	return ''.join(t.kind for t in tokens)

class SequenceMatch:
	""" Quacks enough like `re.Match` for the chunker, but the "groups" are slices of tokens. """
	def __init__(self, items:Sequence, start:int, end:int, groups:dict):
		self.__items = items
		self.__start, self.__end = start, end
		self.__groups = groups
	def start(self): return self.__start
	def end(self): return self.__end
	def span(self, name=None):
		if name is None: return self.__start, self.__end
		return self.__groups.get(name, (-1, -1))
	def group(self, name=None):
		""" The tokens captured under `name` (or the whole match), or None if the group did not participate. """
		if name is None: return self.__items[self.__start:self.__end]
		if name not in self.__groups: return None
		left, right = self.__groups[name]
		return self.__items[left:right]
	def __repr__(self):
		return '<SequenceMatch span=(%d, %d) groups=%r>'%(self.__start, self.__end, sorted(self.__groups))

class Pattern:
	"""
	The protocol is a single generator method, `attempt(items, at)`, which yields every way the
	pattern can match starting at offset `at`, in priority order, as (end, captures) pairs.
	Captures are tuples of (name, (start, end)) pairs; later entries win.
	"""
	def attempt(self, items:Sequence, at:int) -> Iterator[tuple]:
		raise NotImplementedError(type(self))

	def match(self, items:Sequence, at:int=0) -> Optional[SequenceMatch]:
		for end, captures in self.attempt(items, at):
			return SequenceMatch(items, at, end, dict(captures))
		return None

	def finditer(self, items:Sequence) -> Iterator[SequenceMatch]:
		at, size = 0, len(items)
		while at <= size:
			m = self.match(items, at)
			if m is None:
				at += 1
			else:
				yield m
				at = m.end() if m.end() > at else at + 1

class Kind(Pattern):
	""" Exactly one token, whose kind is among the given characters. (None means any kind at all.) """
	def __init__(self, which:Optional[str]): self.which = which
	def attempt(self, items, at):
		if at < len(items) and (self.which is None or items[at].kind in self.which):
			yield at + 1, ()

class End(Pattern):
	""" Zero-width: matches only after the last token. """
	def attempt(self, items, at):
		if at == len(items): yield at, ()

class Concatenation(Pattern):
	def __init__(self, *parts): self.parts = tuple(map(coerce, parts))
	def attempt(self, items, at):
		return self.__chain(0, items, at, ())
	def __chain(self, index, items, at, captures):
		if index == len(self.parts):
			yield at, captures
			return
		for end, found in self.parts[index].attempt(items, at):
			yield from self.__chain(index + 1, items, end, captures + found)

class Alternation(Pattern):
	def __init__(self, *choices): self.choices = tuple(map(coerce, choices))
	def attempt(self, items, at):
		for choice in self.choices:
			yield from choice.attempt(items, at)

class Repetition(Pattern):
	"""
	Repetition works from an explicit stack of pending alternatives rather than by recursion,
	because `lazy_star(ANY)` may well have to step across a few thousand tokens.
	Iterations which consume nothing are not taken.
	"""
	def __init__(self, inner, minimum:int, greedy:bool):
		self.inner, self.minimum, self.greedy = coerce(inner), minimum, greedy

	def attempt(self, items, at):
		if not self.greedy and self.minimum == 0: yield at, ()
		stack = [(iter(self.inner.attempt(items, at)), at, 0, ())]
		while stack:
			options, start, count, captures = stack[-1]
			for end, found in options:
				if end > start: break
			else:
				stack.pop()
				if self.greedy and count >= self.minimum: yield start, captures
				continue
			deeper = captures + found
			if not self.greedy and count + 1 >= self.minimum: yield end, deeper
			stack.append((iter(self.inner.attempt(items, end)), end, count + 1, deeper))

class Capture(Pattern):
	def __init__(self, name:str, inner): self.name, self.inner = name, coerce(inner)
	def attempt(self, items, at):
		for end, found in self.inner.attempt(items, at):
			yield end, found + ((self.name, (at, end)),)

def coerce(it) -> Pattern:
	if isinstance(it, Pattern): return it
	if isinstance(it, str): return Kind(it) if len(it) == 1 else Concatenation(*map(Kind, it))
	raise TypeError(it)

ANY = Kind(None)
END = End()

def one(which:str) -> Pattern: return Kind(which)
def seq(*parts) -> Pattern: return Concatenation(*parts)
def alt(*choices) -> Pattern: return Alternation(*choices)
def plus(p) -> Pattern: return Repetition(p, 1, True)
def star(p) -> Pattern: return Repetition(p, 0, True)
def lazy_plus(p) -> Pattern: return Repetition(p, 1, False)
def lazy_star(p) -> Pattern: return Repetition(p, 0, False)
def optional(p) -> Pattern: return Alternation(p, Concatenation())
def capture(name:str, p) -> Pattern: return Capture(name, p)
