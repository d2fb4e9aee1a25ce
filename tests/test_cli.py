import io, os, tempfile, unittest
from unittest import mock
from contextlib import redirect_stdout, redirect_stderr
from metacode.__main__ import parse_arguments, main, make_listener, watch
from metacode.interface import ReportingListener, StrictListener, NESTED

HELLO = "// #metacode\n// #macro HI(x)\n//   hi {{x}}\n//\n// HI(a)\n// #metagen\n// #metaend\n"

class TestCommandLine(unittest.TestCase):
	def setUp(self):
		self.folder = tempfile.TemporaryDirectory()
		self.path = os.path.join(self.folder.name, 'hello.c')
	
	def tearDown(self):
		self.folder.cleanup()
	
	def write(self, text):
		with open(self.path, 'w', newline='') as fh: fh.write(text)
	
	def read(self):
		with open(self.path, newline='') as fh: return fh.read()
	
	def run_main(self, *argv):
		out, err = io.StringIO(), io.StringIO()
		with redirect_stdout(out), redirect_stderr(err):
			main(parse_arguments([self.path, *argv]))
		return out.getvalue(), err.getvalue()
	
	def test_01_arguments(self):
		args = parse_arguments(['x.c', '-c', '#', '--scoping', NESTED, '--strict'])
		self.assertEqual(('x.c', '#', NESTED), (args.source_path, args.comment, args.scoping))
		self.assertIsInstance(make_listener(args), StrictListener)
		self.assertIsInstance(make_listener(parse_arguments(['x.c', '-v'])), ReportingListener)
		self.assertIsNone(make_listener(parse_arguments(['x.c'])))
	
	def test_02_in_place(self):
		self.write(HELLO)
		out, err = self.run_main()
		self.assertEqual('Compiled output injected into %s\n' % self.path, out)
		self.assertIn('// #metagen\nhi a\n// #metaend\n', self.read())
	
	def test_03_stdout(self):
		self.write(HELLO)
		out, err = self.run_main('--stdout')
		self.assertIn('// #metagen\nhi a\n// #metaend\n', out)
		self.assertEqual(HELLO, self.read())
	
	def test_04_no_metacode(self):
		self.write("int x;\n")
		out, err = self.run_main()
		self.assertEqual('No metacode block found in %s\n' % self.path, out)
	
	def test_05_syntax_error_leaves_file_alone(self):
		bad = HELLO.replace("// #metaend\n", "stale\n// #metagen\n")
		self.write(bad)
		with self.assertRaises(SystemExit):
			self.run_main()
		self.assertEqual(bad, self.read())
	
	def test_06_syntax_error_report(self):
		self.write("// #metacode\nint x;\n// #metaend\n")
		err = io.StringIO()
		with redirect_stderr(err), self.assertRaises(SystemExit):
			main(parse_arguments([self.path]))
		self.assertIn('line 3, column 3: Macro syntax error: all #metaend should be preceded by #metagen', err.getvalue())
	
	def test_07_missing_file(self):
		with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
			main(parse_arguments([os.path.join(self.folder.name, 'nope.c')]))
	
	def test_08_verbose(self):
		self.write(HELLO.replace('HI(a)', 'HO(a)'))
		out, err = self.run_main('-v')
		self.assertIn("Warning: no macro named 'HO'", err)
	
	def test_09_stdout_excludes_output(self):
		with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
			parse_arguments(['x.c', '--stdout', '-o', 'y.c'])

class TestWatch(unittest.TestCase):
	"""
	The watch loop is driven by replacing its sleep with a script of edits, one per tick.
	Explicit modification times keep the test independent of filesystem timestamp resolution.
	"""
	def setUp(self):
		self.folder = tempfile.TemporaryDirectory()
		self.path = os.path.join(self.folder.name, 'hello.c')
		self.write("int x;\n", 100)
	
	def tearDown(self):
		self.folder.cleanup()
	
	def write(self, text, mtime):
		with open(self.path, 'w', newline='') as fh: fh.write(text)
		os.utime(self.path, (mtime, mtime))
	
	def read(self):
		with open(self.path, newline='') as fh: return fh.read()
	
	def watch(self, *edits):
		script = iter(edits)
		def tick(seconds):
			edit = next(script, None)
			if edit is None: raise KeyboardInterrupt
			edit()
		out, err = io.StringIO(), io.StringIO()
		with mock.patch('metacode.__main__.time.sleep', side_effect=tick), redirect_stdout(out), redirect_stderr(err):
			watch(parse_arguments([self.path, '--watch', '--interval', '0']))
		return out.getvalue(), err.getvalue()
	
	def test_01_recompiles_each_change_once(self):
		quiet = lambda: None
		out, err = self.watch(lambda: self.write(HELLO, 200), quiet, quiet)
		self.assertEqual(1, out.count('File changed: '))
		self.assertEqual(1, out.count('Compiled output injected into '))
		self.assertIn('// #metagen\nhi a\n// #metaend\n', self.read())
		self.assertEqual('', err)
	
	def test_02_syntax_error_keeps_watching(self):
		bad = "// #metacode\n// #metaend\n"
		out, err = self.watch(lambda: self.write(bad, 200), lambda: self.write(HELLO, 300))
		self.assertEqual(2, out.count('File changed: '))
		self.assertIn('Macro syntax error: all #metaend should be preceded by #metagen', err)
		self.assertIn('// #metagen\nhi a\n// #metaend\n', self.read())
	
	def test_03_unchanged_file_is_left_alone(self):
		out, err = self.watch(lambda: None, lambda: None)
		self.assertEqual('Watching %s for changes...\n' % self.path, out)


if __name__ == '__main__':
	unittest.main()
