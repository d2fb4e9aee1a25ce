"""
This file aggregates the design constants and exception types which metacode deals in.

There is exactly one fatal error: a directive block whose markers come in the wrong order.
Everything else that can go wrong with a document (a macro nobody defined, a name nothing
binds, a template directive nobody understands) degrades silently by default, because the
generated region gets re-written on every compile anyway. If you'd rather hear about it,
plug a different listener into the compiler. The listener idea is lifted straight from the
way a parser reports errors: the mechanism calls a method; the policy lives in the method.
"""

import sys

DEFAULT_COMMENT = '//' # Single-line comment prefix for C-family languages.

START_MARKER = '#metacode'
MACRO_MARKER = '#macro'
TABLE_MARKER = '#table'
GENERATE_MARKER = '#metagen'
END_MARKER = '#metaend'

FLAT = 'flat' # Loop variables live in the outermost scope frame.
NESTED = 'nested' # Each loop level gets its own frame.
SCOPE_POLICIES = (FLAT, NESTED)

class LanguageError(ValueError):
	""" Base class of all exceptions arising from the macro machinery. """

class MacroSyntaxError(LanguageError):
	"""
	Raised when #metacode, #metagen and #metaend markers appear out of order.
	Parameters are:
		the human-readable complaint.
		the slice of document text holding the offending marker (or None).
	"""
	def __init__(self, message, span=None):
		super().__init__(message, span)
		self.message, self.span = message, span
	def __str__(self): return "Macro syntax error: " + self.message

class UndefinedMacroError(LanguageError): pass
class UnresolvedNameError(LanguageError): pass
class UnrecognizedDirectiveError(LanguageError): pass

class CompileListener:
	"""
	Implement this interface to report/respond to the non-fatal anomalies of a compile.
	The default behavior is to ignore them all, which leaves an empty substitution behind.
	"""
	def undefined_macro(self, name:str, call:str):
		""" An invocation named a macro which has not (yet) been defined. """

	def unresolved_name(self, name:str):
		""" A template referred to a name which neither a parameter nor the scope binds. """

	def unrecognized_directive(self, content:str):
		""" The inside of a {{...}} matched no directive form, so it contributes nothing. """

class ReportingListener(CompileListener):
	""" Squawk on STDERR, but carry on. """
	def __init__(self, stream=None):
		self.stream = stream

	def warn(self, message):
		print("Warning: " + message, file=self.stream or sys.stderr)

	def undefined_macro(self, name, call): self.warn("no macro named %r (in %r)" % (name, call))
	def unresolved_name(self, name): self.warn("nothing is bound to %r" % name)
	def unrecognized_directive(self, content): self.warn("ignoring directive {{%s}}" % content)

class StrictListener(CompileListener):
	""" Treat every anomaly as fatal. """
	def undefined_macro(self, name, call): raise UndefinedMacroError(name, call)
	def unresolved_name(self, name): raise UnresolvedNameError(name)
	def unrecognized_directive(self, content): raise UnrecognizedDirectiveError(content)
