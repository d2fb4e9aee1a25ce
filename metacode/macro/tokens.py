"""
The token vocabulary of the outer document.

Line-level tokens come straight out of the tokenizer. The aggregates further down are what
the grouping passes make of runs of line-level tokens. Every token's `.text` is the exact
source text it stands for, so a pass-through token just emits `.text` again.
"""

from typing import NamedTuple

class Comment(NamedTuple):
	text: str
	kind = 'C'

class LineBreak(NamedTuple):
	text: str
	kind = 'R'

class Block(NamedTuple):
	""" Whatever is on a line besides comment prefixes and directives. """
	text: str
	kind = 'X'

class Start(NamedTuple):
	text: str
	kind = 'S'

class MacroHeader(NamedTuple):
	text: str
	name: str
	params: tuple
	kind = 'M'

class TableHeader(NamedTuple):
	text: str
	name: str
	kind = 'T'

class Generate(NamedTuple):
	text: str
	kind = 'G'

class End(NamedTuple):
	text: str
	kind = 'E'

class Indent(NamedTuple):
	""" The separator space plus the two-space indent of a definition's body line. """
	text: str
	kind = '2'

### Aggregates:

class MacroDefinition(NamedTuple):
	text: str
	name: str
	params: tuple
	body: str
	kind = 'F'

class TableDefinition(NamedTuple):
	text: str
	name: str
	body: str
	kind = 'A'

class Invocation(NamedTuple):
	text: str
	call: str
	kind = '0'

class GeneratedRegion(NamedTuple):
	"""
	A #metagen line, the stale generated text after it, and the #metaend line (if any).
	The compiler keeps `begin` and `end` and replaces `body`.
	"""
	begin: str
	body: str
	end: str
	kind = 'Z'
	@property
	def text(self): return self.begin + self.body + self.end
