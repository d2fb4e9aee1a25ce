import unittest
from typing import NamedTuple
from metacode.support.sequence import kinds, seq, alt, one, plus, star, lazy_plus, lazy_star, optional, capture, ANY, END

class Tok(NamedTuple):
	kind: str

def toks(projection):
	return [Tok(c) for c in projection]

def spans(pattern, projection):
	return [m.span() for m in pattern.finditer(toks(projection))]

class TestSequencePatterns(unittest.TestCase):
	def test_00_projection(self):
		self.assertEqual('CSR', kinds(toks('CSR')))
	
	def test_01_string_means_sequence(self):
		self.assertEqual([(1, 4)], spans(seq('CSR'), 'XCSRX'))
		self.assertEqual([(0, 1), (2, 3)], spans(one('CS'), 'CXS'))
	
	def test_02_lazy_versus_greedy(self):
		self.assertEqual([(0, 3)], spans(seq('C', lazy_star(ANY), 'C'), 'CXCXC'))
		self.assertEqual([(0, 5)], spans(seq('C', star(ANY), 'C'), 'CXCXC'))
		self.assertEqual([(0, 2)], spans(seq('C', lazy_star(ANY), 'C'), 'CCXC'))
		self.assertEqual([(0, 4)], spans(seq('C', lazy_plus(ANY), 'C'), 'CCXC'))
	
	def test_03_leftmost_non_overlapping(self):
		pattern = seq('CSR', lazy_star(ANY), 'CGR')
		self.assertEqual([(0, 8), (8, 14)], spans(pattern, 'CSRXRCGRCSRCGR'))
	
	def test_04_alternation_order_is_priority(self):
		trim = alt(
			seq(one('ST'), capture('trim', 'B'), one('STN')),
			seq(capture('trim', one('BR')), one('STN')),
			seq(one('ST'), capture('trim', one('BL'))),
		)
		m = trim.match(toks('SBS'))
		self.assertEqual((0, 3), m.span())
		self.assertEqual((1, 2), m.span('trim'))
		m = trim.match(toks('SBX'))
		self.assertEqual((0, 2), m.span())
		self.assertEqual([Tok('B')], m.group('trim'))
	
	def test_05_backtracking_into_repetition(self):
		# The greedy repetition must give back the final 'CR' for the rest to match.
		pattern = seq(plus(alt('CXR', 'CR')), 'CR', END)
		self.assertEqual((0, 7), pattern.match(toks('CXRCRCR')).span())
	
	def test_06_optional_and_end(self):
		pattern = seq('CE', optional('R'))
		self.assertEqual([(0, 3), (3, 5)], spans(pattern, 'CERCE'))
		region = seq('CGR', capture('body', lazy_star(ANY)), capture('end', alt(seq('CE', optional('R')), END)))
		m = region.match(toks('CGRXRXR'))
		self.assertEqual((3, 7), m.span('body'))
		self.assertEqual([], m.group('end'))
		m = region.match(toks('CGRCER'))
		self.assertEqual((3, 3), m.span('body'))
		self.assertEqual((3, 6), m.span('end'))
	
	def test_07_missing_group(self):
		m = alt(capture('a', 'A'), capture('b', 'B')).match(toks('B'))
		self.assertIsNone(m.group('a'))
		self.assertEqual((-1, -1), m.span('a'))
		self.assertEqual([Tok('B')], m.group('b'))
	
	def test_08_no_match(self):
		self.assertIsNone(seq('CGR').match(toks('CGX')))
		self.assertEqual([], spans(seq('CGR'), ''))
	
	def test_09_long_runs_do_not_recurse(self):
		projection = 'CGR' + 'XR' * 5000 + 'CER'
		region = seq('CGR', lazy_star(ANY), 'CER')
		self.assertEqual([(0, len(projection))], spans(region, projection))
		self.assertEqual([(0, 10000)], spans(plus(one('XR')), 'XR' * 5000))


if __name__ == '__main__':
	unittest.main()
