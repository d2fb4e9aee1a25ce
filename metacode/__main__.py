"""
Expand the #metacode blocks of a source file, injecting the generated output between
its #metagen and #metaend lines. Everything else in the file is left exactly as it was.

With --watch, keep an eye on the file and recompile whenever it changes.
"""

import sys, os, time, argparse

from metacode.interface import MacroSyntaxError, LanguageError, ReportingListener, StrictListener, DEFAULT_COMMENT, SCOPE_POLICIES, FLAT
from metacode.macro.compiler import compile_file, compile_string
from metacode.support.failureprone import SourceText

def parse_arguments(argv=None):
	parser = argparse.ArgumentParser(prog='py -m metacode', description=__doc__,)
	parser.add_argument('source_path', help='path to the file to compile')
	parser.add_argument('-c', '--comment', default=DEFAULT_COMMENT, help='single-line comment prefix of the source language (default: %(default)s)')
	target = parser.add_mutually_exclusive_group()
	target.add_argument('-o', '--output', help='write the result here instead of back into the source file')
	target.add_argument('--stdout', action='store_true', help='print the result instead of writing any file')
	parser.add_argument('--scoping', choices=SCOPE_POLICIES, default=FLAT, help='where loop variables live (default: %(default)s)')
	parser.add_argument('--strict', action='store_true', help='treat undefined macros, unbound names, and nonsense directives as errors')
	parser.add_argument('-v', '--verbose', action='store_true', help='warn about undefined macros, unbound names, and nonsense directives')
	parser.add_argument('-w', '--watch', action='store_true', help='recompile whenever the file changes')
	parser.add_argument('--interval', type=float, default=0.5, help='seconds between checks while watching (default: %(default)s)')
	return parser.parse_args(argv)

def make_listener(args):
	if args.strict: return StrictListener()
	if args.verbose: return ReportingListener()
	return None

def compile_once(args) -> bool:
	""" Returns False if the document could not be compiled; the reason has been printed. """
	options = dict(comment=args.comment, policy=args.scoping, listener=make_listener(args))
	try:
		if args.stdout:
			with open(args.source_path, newline='') as fh: document = fh.read()
			print(compile_string(document, **options), end='')
			return True
		if compile_file(args.source_path, output=args.output, **options):
			print('Compiled output injected into ' + (args.output or args.source_path))
		else:
			print('No metacode block found in ' + args.source_path)
		return True
	except MacroSyntaxError as e:
		with open(args.source_path, newline='') as fh: document = fh.read()
		source = SourceText(document, filename=args.source_path)
		if e.span is None: print(str(e), file=sys.stderr)
		else: source.complain(e.span, str(e))
	except LanguageError as e:
		print('%s: %s' % (type(e).__name__, ', '.join(map(repr, e.args))), file=sys.stderr)
	return False

def watch(args):
	print('Watching %s for changes...' % args.source_path)
	last = os.stat(args.source_path).st_mtime
	try:
		while True:
			time.sleep(args.interval)
			try: mtime = os.stat(args.source_path).st_mtime
			except FileNotFoundError: continue
			if mtime != last:
				print('File changed: %s, recompiling...' % args.source_path)
				compile_once(args)
				# Our own write-back counts as a change; don't chase it.
				last = os.stat(args.source_path).st_mtime
	except KeyboardInterrupt:
		pass

def main(args):
	if not os.path.exists(args.source_path):
		print('No such file: ' + args.source_path, file=sys.stderr)
		sys.exit(1)
	ok = compile_once(args)
	if args.watch: watch(args)
	elif not ok: sys.exit(1)

if __name__ == '__main__': main(parse_arguments())
