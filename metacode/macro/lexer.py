"""
String parser for the outer document: the file that carries #metacode blocks in its comments.

Like the template tokenizer, this is a series of chunker passes:

1. Split the text at line breaks and at comment prefixes found at the start of a line.
   Whatever lies between those is handed to the next pass, one piece at a time.
2. Within each such piece, recognize a directive anchored at its start, and call the rest
   plain block text. Since the piece usually begins right after a comment prefix, this is
   where `// #macro NAME(a, b)` and friends are found.
3. (Validate the directive structure: see `grammar.py`.)
4. Within each run from a #metacode line to the next #metagen line, group whole lines into
   macro definitions, table definitions, and invocations.
5. Collapse each #metagen ... #metaend run into a single generated-region token.

Passes 4 and 5 use sequence patterns over token kinds. For reference, the kinds are:

	C comment prefix    R line break        X block text
	S #metacode         M #macro header     T #table header
	G #metagen          E #metaend          2 body-line indent
"""

import re
from ..support.chunker import chunker, identity
from ..support.sequence import seq, alt, plus, lazy_star, optional, capture, ANY, END
from ..interface import DEFAULT_COMMENT, START_MARKER, MACRO_MARKER, TABLE_MARKER, GENERATE_MARKER, END_MARKER
from .tokens import (
	Comment, LineBreak, Block, Start, MacroHeader, TableHeader, Generate, End, Indent,
	MacroDefinition, TableDefinition, Invocation, GeneratedRegion,
)
from . import grammar

DIRECTIVE = re.compile(
	r'(?P<start>^ %s)' % re.escape(START_MARKER)
	+ r'|(?P<macro>^ %s (?P<macro_name>\w{1,99})\((?P<macro_params>[\w, ]{0,99})\))' % re.escape(MACRO_MARKER)
	+ r'|(?P<table>^ %s (?P<table_name>\w{1,99}))' % re.escape(TABLE_MARKER)
	+ r'|(?P<generate>^ %s)' % re.escape(GENERATE_MARKER)
	+ r'|(?P<end>^ %s)' % re.escape(END_MARKER)
	+ r'|(?P<indent>^   )'
)

BODY_LINE = alt(seq('C2', optional('X'), 'R'), 'CR')
DECLARATIONS = seq('CSR', lazy_star(ANY), 'CGR')
DECLARATION = alt(
	capture('macro', seq('CMR', plus(BODY_LINE))),
	capture('table', seq('CTR', plus(BODY_LINE))),
	capture('invocation', plus(alt('CXR', 'CR'))),
)
REGION = seq('CGR', capture('body', lazy_star(ANY)), capture('end', alt(seq('CE', optional('R')), END)))

def line_pattern(comment:str):
	return re.compile(r'^(?P<comment>%s)|(?P<newline>\r?\n)' % re.escape(comment), re.M)

def parse_params(params:str) -> tuple:
	return tuple(p.strip() for p in params.split(',') if p.strip())

def split_block(text:str) -> list:
	def directive(m, i, e):
		g = m.group
		if g('start') is not None: return [Start(g())]
		if g('macro') is not None: return [MacroHeader(g(), g('macro_name'), parse_params(g('macro_params')))]
		if g('table') is not None: return [TableHeader(g(), g('table_name'))]
		if g('generate') is not None: return [Generate(g())]
		if g('end') is not None: return [End(g())]
		return [Indent(g())]
	return chunker(text, DIRECTIVE, directive, lambda i, e: [Block(text[i:e])])

def split_lines(text:str, comment:str=DEFAULT_COMMENT) -> list:
	def line_structure(m, i, e):
		if m.group('comment') is not None: return [Comment(m.group())]
		return [LineBreak(m.group())]
	return chunker(text, line_pattern(comment), line_structure, lambda i, e: split_block(text[i:e]))

def outer_text(tokens) -> str:
	return ''.join(t.text for t in tokens)

def definition_body(run) -> str:
	""" Skip the header line and the final line break; keep the text and line breaks in between. """
	return ''.join(t.text for t in run[3:-1] if isinstance(t, (Block, LineBreak)))

def invocation_call(run) -> str:
	def line(t):
		if isinstance(t, Block): return t.text[1:] if t.text.startswith(' ') else t.text
		if isinstance(t, LineBreak): return t.text
		return ''
	return ''.join(map(line, run))

def group_declarations(tokens:list) -> list:
	def classify(m, i, e):
		run = m.group()
		if m.group('macro') is not None:
			header = run[1]
			return [MacroDefinition(outer_text(run), header.name, header.params, definition_body(run))]
		if m.group('table') is not None:
			return [TableDefinition(outer_text(run), run[1].name, definition_body(run))]
		return [Invocation(outer_text(run), invocation_call(run))]
	def declarations(m, i, e):
		run = m.group()
		return chunker(run, DECLARATION, classify, identity(run))
	return chunker(tokens, DECLARATIONS, declarations, identity(tokens))

def collect_regions(tokens:list) -> list:
	def region(m, i, e):
		return [GeneratedRegion(outer_text(tokens[i:i+3]), outer_text(m.group('body')), outer_text(m.group('end')))]
	return chunker(tokens, REGION, region, identity(tokens))

def parse_document(text:str, comment:str=DEFAULT_COMMENT) -> list:
	"""
	:param text: the whole document.
	:param comment: the single-line comment prefix of the document's language.
	:return: the token stream the compiler folds over.
	:raises MacroSyntaxError: if the markers are out of order.
	"""
	tokens = split_lines(text, comment)
	grammar.validate(tokens)
	return collect_regions(group_declarations(tokens))
