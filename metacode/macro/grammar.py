"""
Semantic grammar check for the directive structure of a document.

The three structural markers must follow the cycle

	outside --#metacode--> declaring --#metagen--> generating --#metaend--> outside

with one allowance: #metacode may repeat while declaring, so a document can define macros
and tables in several blocks before it finally invokes one. The machine below enforces
exactly that, and everything which is not one of these three markers passes unremarked.
Ending the document in any state is fine.
"""

from ..interface import MacroSyntaxError
from .tokens import Start, Generate, End

OUTSIDE, DECLARING, GENERATING = range(3)

# (state, marker type) -> next state, or a complaint.
TRANSITIONS = {
	(OUTSIDE, Start): DECLARING,
	(DECLARING, Start): DECLARING,
	(GENERATING, Start): "all #metagen should be followed by #metaend",
	(OUTSIDE, Generate): "all #metagen should be preceded by #metacode",
	(DECLARING, Generate): GENERATING,
	(GENERATING, Generate): "all #metagen should be followed by #metaend",
	(OUTSIDE, End): "all #metaend should be preceded by #metagen and #metacode",
	(DECLARING, End): "all #metaend should be preceded by #metagen",
	(GENERATING, End): OUTSIDE,
}

def validate(tokens) -> int:
	"""
	:param tokens: line-level document tokens, in order.
	:return: the state at the end of the document.
	:raises MacroSyntaxError: naming the violated pairing and where the offending marker sits.
	"""
	state, offset = OUTSIDE, 0
	for token in tokens:
		key = (state, type(token))
		if key in TRANSITIONS:
			outcome = TRANSITIONS[key]
			if isinstance(outcome, str):
				raise MacroSyntaxError(outcome, slice(offset, offset + len(token.text)))
			state = outcome
		offset += len(token.text)
	return state
