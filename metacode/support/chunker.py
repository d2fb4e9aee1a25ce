"""
The chunker is a pattern-matching map-reduce over a string of symbols.
It's tiny, but every tokenizing pass in this package is an application of it.

The subject is either a string (with a compiled `re` pattern) or a sequence of tokens
(with a `sequence.Pattern`). Either way, the pattern supplies `finditer(subject)` and
the match objects supply `.start()` and `.end()`, which is all the chunker cares about.

You are expected to keep any state you need outside of this function, within reach of
your callbacks. The usual idiom is to slice the subject (or the parallel token list)
between the offsets you are handed.
"""

from typing import Callable, Optional, Sequence

def chunker(subject, pattern, on_match:Callable, on_gap:Optional[Callable]=None) -> list:
	"""
	:param subject: whatever the pattern can scan.
	:param pattern: anything with a `finditer(subject)` method yielding leftmost non-overlapping matches.
	:param on_match: called as on_match(m, start, end); returns a sequence of items to keep.
	:param on_gap: called as on_gap(start, end) for each unmatched stretch; returns a sequence of
		items to keep. If omitted, unmatched stretches are dropped.
	:return: the concatenation, in order, of everything the callbacks returned.
	"""
	result = []
	last = 0
	for m in pattern.finditer(subject):
		start, end = m.start(), m.end()
		if on_gap is not None and last < start:
			result.extend(on_gap(last, start))
		last = end
		result.extend(on_match(m, start, end))
	if on_gap is not None and last < len(subject):
		result.extend(on_gap(last, len(subject)))
	return result

def identity(items:Sequence) -> Callable:
	""" A gap-reducer which keeps the corresponding items just as they were. """
	return lambda start, end: items[start:end]
