import unittest
from metacode.support.failureprone import SourceText, illustration

class TestSourceText(unittest.TestCase):
	def test_01_row_col(self):
		st = SourceText("alpha\nbeta gamma\n")
		self.assertEqual((1, 0), st.find_row_col(0))
		self.assertEqual((2, 2), st.find_row_col(8))
		self.assertEqual("beta gamma\n", st.line_of_text(2))
	
	def test_02_line_break_modes(self):
		text = "a\rb\nc"
		self.assertEqual((3, 0), SourceText(text).find_row_col(4))
		self.assertEqual((2, 0), SourceText(text, line_breaks="unix").find_row_col(4))
		self.assertEqual((1, 4), SourceText(text, line_breaks="dos").find_row_col(4))
	
	def test_03_complaint(self):
		text = "alpha\nbeta gamma\n"
		complaint = SourceText(text).complaint(slice(11, 16), "oops")
		first, picture, caret = complaint.split('\n')
		self.assertEqual("At line 2, column 6: oops", first)
		self.assertEqual(" >>> beta gamma", picture)
		self.assertEqual(" " * 10 + "^^^^^ near here", caret)
		named = SourceText(text, filename='doc.c').complaint(slice(11, 16), "oops")
		self.assertTrue(named.startswith("doc.c: line 2, column 6: oops"))
	
	def test_04_illustration(self):
		self.assertEqual("abc\n ^ near here", illustration("abc\n", 1))
		self.assertEqual("\tabc\n\t ^^ near here", illustration("\tabc", 2, 5))


if __name__ == '__main__':
	unittest.main()
