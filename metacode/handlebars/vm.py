"""
Sandboxed virtual machine for executing template logic (which is to say, for-loops).

Execution happens in two steps:

1. Fold the flat token list into a loop tree. Each node has an optional ForLoop and the
   tokens belonging to that nesting level. Content after a loop closes goes into a fresh
   continuation node, which is the loop's next sibling.
2. Walk the tree depth-first, pre-order, visiting each node once. A node renders its own
   tokens for every row it iterates over, and only then are its children walked, in the
   order they were created. A node without a loop runs once, against an implicit empty row.
   So a loop nested inside another runs after all the outer rows, not once per outer row.

Names resolve against the macro's formal parameters first (substituting the actual
arguments from the invocation) and then against the frames of a Scope, in list order.
Table references resolve twice, so a parameter may hold the *name* of a table.

Where loop variables get written is a policy decision. The FLAT policy writes them into
the outermost frame, which is the document's own data scope: they outlive the loop, and
nested loops using the same names clobber each other. Existing templates lean on that, so
it's the default. The NESTED policy gives each loop level a frame of its own.
"""

from collections.abc import Mapping, Sequence
from typing import NamedTuple, Optional
from ..interface import CompileListener, FLAT, NESTED
from .tokens import ForLoop, EndFor

class Macro(NamedTuple):
	name: str
	params: list
	tokens: list

class LoopNode:
	def __init__(self, loop:Optional[ForLoop]=None):
		self.loop = loop
		self.tokens = []
		self.children = []

	def adopt(self, child:"LoopNode") -> "LoopNode":
		self.children.append(child)
		return child

class LoopTreeBuilder:
	"""
	The stack holds the nodes whose loops are still open, outermost first.
	The root is always at the bottom, and `current` is where plain tokens go.
	"""
	def __init__(self):
		self.root = self.current = LoopNode()
		self.stack = [self.root]

	def open(self, loop:ForLoop):
		self.current = self.stack[-1].adopt(LoopNode(loop))
		self.stack.append(self.current)

	def close(self):
		if len(self.stack) > 1: self.stack.pop()
		self.current = self.stack[-1].adopt(LoopNode())

	def append(self, token):
		self.current.tokens.append(token)

def build_loop_tree(tokens) -> LoopNode:
	builder = LoopTreeBuilder()
	for t in tokens:
		if isinstance(t, ForLoop): builder.open(t)
		elif isinstance(t, EndFor): builder.close()
		else: builder.append(t)
	return builder.root

class Scope:
	"""
	An ordered list of frames (mappings from name to value).
	Lookup goes through them in order; the first frame holding the key wins.
	The last frame is the document's data scope, where the tables live.
	"""
	def __init__(self, data:dict, policy=FLAT):
		if policy not in (FLAT, NESTED): raise ValueError(policy)
		self.frames = [data]
		self.policy = policy

	def find(self, name):
		""" Return (True, value) if some frame binds the name, otherwise (False, None). """
		for frame in self.frames:
			if name in frame: return True, frame[name]
		return False, None

	def enter(self):
		if self.policy == NESTED: self.frames.insert(0, {})

	def leave(self):
		if self.policy == NESTED: self.frames.pop(0)

	def bind(self, name, value):
		"""
		Under FLAT policy frames[0] is the data scope, where loop variables deliberately leak.
		Under NESTED policy it is the frame for the innermost loop level.
		"""
		if name is not None: self.frames[0][name] = value

class Interpreter:
	"""
	Renders one macro invocation. Rendering dispatches on the token's class name, so a method
	named for each kind of leaf token says what that token contributes to the output.
	"""
	def __init__(self, scope:Scope, macro:Macro, arguments:Sequence, listener:CompileListener=None):
		self.scope = scope
		self.macro = macro
		self.arguments = list(arguments)
		self.listener = listener or CompileListener()
		self.out = []

	def resolve(self, ref):
		if ref in self.macro.params:
			i = self.macro.params.index(ref)
			return self.arguments[i] if i < len(self.arguments) else None
		found, value = self.scope.find(ref)
		if not found: self.listener.unresolved_name(ref)
		return value

	def resolve_table(self, ref):
		value = self.resolve(ref)
		if isinstance(value, str): value = self.resolve(value)
		return value

	def emit(self, value):
		if value is not None: self.out.append(value if isinstance(value, str) else str(value))

	def run(self, node:LoopNode):
		if node.loop is None:
			rows = [{}]
		else:
			rows = self.resolve_table(node.loop.table)
			if not isinstance(rows, Sequence) or isinstance(rows, str): rows = []
		self.scope.enter()
		try:
			for i, row in enumerate(rows):
				if node.loop is not None:
					self.scope.bind(node.loop.key, i)
					self.scope.bind(node.loop.value, row)
				for token in node.tokens:
					getattr(self, type(token).__name__)(token)
			for child in node.children:
				self.run(child)
		finally:
			self.scope.leave()

	def render(self, root:LoopNode) -> str:
		self.run(root)
		return ''.join(self.out)

	def Text(self, token): self.emit(token.text)
	def Whitespace(self, token): self.emit(token.text)
	def Variable(self, token): self.emit(self.resolve(token.name))

	def Member(self, token):
		subject = self.resolve(token.name)
		if isinstance(subject, Mapping) and token.member in subject: self.emit(subject[token.member])
		elif subject is not None: self.listener.unresolved_name(token.name + '.' + token.member)

	def Count(self, token):
		table = self.resolve_table(token.name)
		if isinstance(table, Sequence) and not isinstance(table, str): self.emit(len(table))

def execute(scope, macro:Macro, arguments:Sequence, *, policy=FLAT, listener:CompileListener=None) -> str:
	"""
	:param scope: either a Scope or a plain dictionary (the data scope) to wrap in one.
	:param macro: the macro to invoke.
	:param arguments: actual parameters, positionally matched against macro.params.
	:return: the rendered text.
	"""
	if not isinstance(scope, Scope): scope = Scope(scope, policy)
	return Interpreter(scope, macro, arguments, listener).render(build_loop_tree(macro.tokens))
