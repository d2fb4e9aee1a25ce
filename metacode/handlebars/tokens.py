"""
The token vocabulary of the template language.

Each kind of token is its own little NamedTuple. All of them keep the source text they came
from in `.text`, so any lossless pass can be checked by joining those back together, and all
of them carry a one-character `kind` for use with the sequence patterns.
"""

from enum import Enum
from typing import NamedTuple, Optional

class Trim(Enum):
	""" Which side(s) of a {{directive}} asked, with a tilde, to eat the adjacent whitespace. """
	BOTH = 'B'
	LEFT = 'L'
	RIGHT = 'R'
	NONE = 'H'

class Text(NamedTuple):
	text: str
	kind = 'X'

WHITESPACE_KIND = {' ': 'S', '\t': 'T', '\r': 'N', '\n': 'N'}

class Whitespace(NamedTuple):
	""" A run of spaces (S), tabs (T) or line breaks (N). """
	text: str
	@property
	def kind(self): return WHITESPACE_KIND[self.text[0]]

class Directive(NamedTuple):
	""" A {{...}} before anyone has looked inside it. """
	text: str
	trim: Trim
	content: str
	@property
	def kind(self): return self.trim.value

class ForLoop(NamedTuple):
	"""
	Opens a loop over the rows of `table`.
	`key` names the 0-based row index and `value` names the row; either may be absent.
	"""
	text: str
	key: Optional[str]
	value: Optional[str]
	table: str
	kind = '@'

class EndFor(NamedTuple):
	text: str
	kind = 'E'

class Member(NamedTuple):
	""" {{name.member}} """
	text: str
	name: str
	member: str
	kind = '.'

class Count(NamedTuple):
	""" {{#table}}: the number of rows. """
	text: str
	name: str
	kind = '#'

class Variable(NamedTuple):
	text: str
	name: str
	kind = '$'
