"""
String parser for the Handlebars-like template language.

This is a multi-pass tokenizer. Each pass is one application of the chunker to the output
of the pass before, so each pass is easy to test (and to get wrong) in isolation:

1. Split the raw text into {{directives}} and plain text.
2. Split plain text into runs of spaces, tabs, and line breaks, and whatever is left.
3. Drop the whitespace next to directives that asked for it with a tilde.
4. Look inside each directive and decide what it actually says.

The first two passes are lossless. The third is the whole point of the whitespace-control
feature, so it is not. The fourth replaces each directive with its meaning, or with nothing
at all if it has none.
"""

import re
from ..support.chunker import chunker, identity
from ..support.sequence import seq, alt, one, capture
from ..interface import CompileListener
from .tokens import Trim, Text, Whitespace, Directive, ForLoop, EndFor, Member, Count, Variable

# Alternation order matters: it is what decides which side(s) a tilde belongs to.
# The content may not run past a closing }}, or {{~a}} b {{c~}} would read as one directive.
CONTENT = r'(?:(?!\}\}).)*?'
DIRECTIVE = re.compile(
	r'\{\{~(?P<B>%s)~\}\}|\{\{~(?P<L>%s)\}\}|\{\{(?P<R>%s)~\}\}|\{\{(?P<H>%s)\}\}' % ((CONTENT,) * 4)
)

WHITESPACE = re.compile(r' +|\t+|[\r\n]+')

TRIM = alt(
	seq(one('ST'), capture('trim', 'B'), one('STN')), # Both sides
	seq(capture('trim', one('BR')), one('STN')), # Right side only
	seq(one('ST'), capture('trim', one('BL'))), # Left side only
)

GRAMMAR = re.compile(
	r'(?P<pair>#?for (?P<pair_key>\w+),(?P<pair_value>\w+) of (?P<pair_table>\w+))'
	r'|(?P<index>#?for (?P<index_key>\w+) in (?P<index_table>\w+))'
	r'|(?P<value>#?for (?P<value_value>\w+) of (?P<value_table>\w+))'
	r'|(?P<this>#?for (?P<this_table>\w+))'
	r'|(?P<end>/for)'
	r'|(?P<member>(?P<member_name>\w+)\.(?P<member_member>\w+))'
	r'|(?P<count>#(?P<count_name>\w+))'
	r'|(?P<var>(?P<var_name>\w+))'
)

def split_directives(text:str) -> list:
	def directive(m, i, e):
		for trim in Trim:
			content = m.group(trim.value)
			if content is not None: return [Directive(m.group(), trim, content)]
		return []
	return chunker(text, DIRECTIVE, directive, lambda i, e: [Text(text[i:e])])

def split_whitespace(tokens:list) -> list:
	def split(token):
		if not isinstance(token, Text): return [token]
		source = token.text
		return chunker(source, WHITESPACE, lambda m, i, e: [Whitespace(m.group())], lambda i, e: [Text(source[i:e])])
	return [each for token in tokens for each in split(token)]

def trim_whitespace(tokens:list) -> list:
	def keep(m, i, e):
		return m.group('trim')
	return chunker(tokens, TRIM, keep, identity(tokens))

def interpret(directive:Directive):
	""" Return the meaning of a directive as a token, or None if it has none. """
	m = GRAMMAR.search(directive.content)
	if m is None: return None
	text, g = directive.text, m.group
	if g('pair') is not None: return ForLoop(text, g('pair_key'), g('pair_value'), g('pair_table'))
	if g('index') is not None: return ForLoop(text, g('index_key'), None, g('index_table'))
	if g('value') is not None: return ForLoop(text, None, g('value_value'), g('value_table'))
	if g('this') is not None: return ForLoop(text, None, 'this', g('this_table'))
	if g('end') is not None: return EndFor(text)
	if g('member') is not None: return Member(text, g('member_name'), g('member_member'))
	if g('count') is not None: return Count(text, g('count_name'))
	return Variable(text, g('var_name'))

def parse_directives(tokens:list, listener:CompileListener=None) -> list:
	listener = listener or CompileListener()
	result = []
	for token in tokens:
		if isinstance(token, Directive):
			meaning = interpret(token)
			if meaning is None: listener.unrecognized_directive(token.content)
			else: result.append(meaning)
		else:
			result.append(token)
	return result

def parse_template(text:str, listener:CompileListener=None) -> list:
	"""
	:param text: Handlebars-style template source
	:return: the flat token list the interpreter wants.
	"""
	tokens = trim_whitespace(split_whitespace(split_directives(text)))
	return parse_directives(tokens, listener)
