"""
This module is all about showing the user where a document went wrong.

The tokenizers only ever deal in character offsets: a token knows its text, and a pass
knows how far along it is. That's as much location data as the machinery needs. People,
on the other hand, want a line and column number and a picture of the offending line.
The SourceText wrapper converts one into the other.

Line breaks are a funny thing. Unix calls for \n, classic Apple for \r, and DOS for \r\n.
A document this tool rewrites may well use any of them, so the default `normal` mode
treats all three as line breaks. You can pick a stricter mode from LINEBREAK_MODE.
"""

import bisect, re, sys

LINEBREAK_MODE = {
	'normal': re.compile(r'\r\n?|\n'),
	'unix': re.compile(r'\n'),
	'dos': re.compile(r'\r\n'),
}

def illustration(single_line:str, start:int, width:int=0, *, prefix='', caption="near here") -> str:
	""" Draw a caret under the part of a line which deserves attention. """
	line = single_line.rstrip('\r\n')
	blanks = ''.join(c if c == '\t' else ' ' for c in prefix + line[:start])
	underline = '^' * max(1, min(width, len(line) - start))
	return "%s%s\n%s%s %s" % (prefix, line, blanks, underline, caption)

class SourceText:
	""" Wrapper for a document: participates in half-respectable error-display with context. """
	def __init__(self, content:str, *, filename:str=None, line_breaks='normal', first_line=1):
		self.content = content
		self.filename = filename
		self.line_breaks = line_breaks
		self.first_line = first_line
		self.__bounds = None

	def __make_bounds(self):
		""" Lazily only find line breaks if it turns out to be necessary for a particular text. """
		if self.__bounds is None:
			inside = [m.end() for m in LINEBREAK_MODE[self.line_breaks].finditer(self.content)]
			self.__bounds = [0] + inside + [len(self.content)]
		return self.__bounds

	def find_row_col(self, index:int):
		""" Based on a character offset from the start of text. Respects self.first_line. """
		bounds = self.__make_bounds()
		row = bisect.bisect_right(bounds, index, hi=len(bounds) - 1) - 1
		return row + self.first_line, index - bounds[row]

	def line_of_text(self, row:int) -> str:
		""" Argument respects self.first_line. """
		bounds = self.__make_bounds()
		r = max(0, row - self.first_line)
		return self.content[bounds[r]:bounds[r + 1]]

	def complaint(self, span:slice, message:str) -> str:
		row, col = self.find_row_col(span.start)
		where = "At" if self.filename is None else str(self.filename) + ":"
		reference = "%s line %d, column %d: %s" % (where, row, col + 1, message)
		picture = illustration(self.line_of_text(row), col, span.stop - span.start, prefix=' >>> ')
		return reference + "\n" + picture

	def complain(self, span:slice, message:str):
		print(self.complaint(span, message), file=sys.stderr)
