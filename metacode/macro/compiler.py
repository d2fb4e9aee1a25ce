"""
Compile a document: fold the grouped token stream into the rewritten text.

The fold is strictly left to right, which is why macros and tables must be defined before
they are used. Along the way it keeps a macro registry, a data scope (the tables), and the
output of the most recent invocation, which is what the next generated region receives.
"""

import re
from ..interface import CompileListener, DEFAULT_COMMENT, FLAT, START_MARKER
from ..support.markdown import parse_table
from ..handlebars.lexer import parse_template
from ..handlebars.vm import Macro, Scope, execute
from .tokens import MacroDefinition, TableDefinition, Invocation, GeneratedRegion
from .lexer import parse_document

HAS_METACODE = re.compile(re.escape(START_MARKER) + r'\r?\n')
CALL_NOISE = re.compile(r'[)\s]+')
CALL_SEPARATOR = re.compile(r'[(,]')

def has_metacode(text:str) -> bool:
	return HAS_METACODE.search(text) is not None

def parse_call(call:str) -> tuple:
	"""
	Permissive: `NAME(a, b)` gives ('NAME', ['a', 'b']). Closing parens and whitespace are
	simply deleted, and there is no arity check. A blank call gives ('', []).
	"""
	name, *args = CALL_SEPARATOR.split(CALL_NOISE.sub('', call))
	return name, args

class Compiler:
	def __init__(self, *, policy=FLAT, listener:CompileListener=None):
		self.listener = listener or CompileListener()
		self.macros = {}
		self.scope = Scope({}, policy)
		self.pending = ''

	def compile(self, tokens) -> str:
		return ''.join(self.visit(t) for t in tokens)

	def visit(self, token) -> str:
		if isinstance(token, GeneratedRegion):
			return token.begin + self.pending + token.end
		if isinstance(token, TableDefinition):
			self.scope.frames[-1][token.name] = parse_table(token.body)
		elif isinstance(token, MacroDefinition):
			tokens = parse_template(token.body, self.listener)
			self.macros[token.name] = Macro(token.name, list(token.params), tokens)
		elif isinstance(token, Invocation):
			self.invoke(token.call)
		return token.text

	def invoke(self, call:str):
		name, args = parse_call(call)
		if not name: return
		if name in self.macros:
			self.pending = execute(self.scope, self.macros[name], args, listener=self.listener)
		else:
			self.pending = ''
			self.listener.undefined_macro(name, call.strip())

def compile_tokens(tokens, *, policy=FLAT, listener:CompileListener=None) -> str:
	return Compiler(policy=policy, listener=listener).compile(tokens)

def compile_string(text:str, *, comment=DEFAULT_COMMENT, policy=FLAT, listener:CompileListener=None) -> str:
	"""
	:return: the rewritten document, or the very same text if it holds no #metacode block.
	:raises MacroSyntaxError: if the directive markers are out of order. There is no partial output.
	"""
	if not has_metacode(text): return text
	return compile_tokens(parse_document(text, comment), policy=policy, listener=listener)

def compile_file(pathname, *, output=None, **kwargs) -> bool:
	"""
	Compile a file in place (or into `output`). The target is only written when there is
	metacode to compile and the result differs from what is already there.
	:return: whether the document held metacode at all.
	"""
	with open(pathname, newline='') as fh: document = fh.read()
	if not has_metacode(document): return False
	result = compile_string(document, **kwargs)
	target = output or pathname
	if target != pathname or result != document:
		with open(target, 'w', newline='') as fh: fh.write(result)
	return True
