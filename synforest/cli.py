"""Command-line interfaces to modules."""
import io
import logging
from sys import argv, stdout, stderr
from sys import exit as sysexit
from getopt import gnu_getopt, GetoptError

COMMANDS = {
		'normalize': 'Read bracket trees, lay them out and write them back.',
		'layout': 'Print the coordinates assigned to the nodes of a tree.',
	}


def main(args=None):
	"""Expose command-line interfaces."""
	from os.path import basename
	if args is None:
		args = argv[1:]
	thiscmd = basename(argv[0]) if argv and argv[0] else 'synforest'
	if len(args) == 1 and args[0] in ('-v', '--version'):
		from synforest import __version__
		print(__version__)
	elif not args or args[0] not in COMMANDS:
		print('Usage: %s <command> [arguments]\n' % thiscmd, file=stderr)
		print('Command is one of:', file=stderr)
		for a, b in COMMANDS.items():
			print('   %s  %s' % (a.ljust(15), b), file=stderr)
		print('for additional instructions issue: %s <command> --help'
			% thiscmd, file=stderr)
		sysexit(2)
	else:
		globals()[args[0]](args[1:])


def getparams(opts):
	"""Collect layout parameters from a parameter file and options."""
	from .layout import DEFAULTS, readparam
	if '--param' in opts:
		params = readparam(opts['--param'])
	else:
		params = dict(DEFAULTS)
	if '--width' in opts:
		params['canvaswidth'] = params['viewwidth'] = float(opts['--width'])
	if '--height' in opts:
		params['viewheight'] = float(opts['--height'])
	return params


def setuplogging(opts):
	"""Configure logging to standard error."""
	level = logging.WARNING if '--quiet' in opts else logging.INFO
	logging.basicConfig(level=level, format='%(message)s')


def normalize(args=None):
	"""Usage: synforest normalize [input [output]] [options]

Each non-blank line of the input is read as a tree in bracket notation, e.g.
[S [NP [Det the] [N dog]] [VP barks]]. Every tree is laid out and written
back on its own line. Standard in/output is used if not given; lines with
syntax errors are reported and skipped.

Options:
  --param=file      read layout parameters from file.
  --width=x         width of canvas and visible area.
  --height=x        height of visible area.
  -n, --numtrees=x  only convert the first x trees.
  --quiet           only report errors."""
	from itertools import islice
	from .util import openread
	from .bracket import BracketSyntaxError
	from .editor import TreeEditor
	if args is None:
		args = argv[2:]
	flags = ('help', 'quiet')
	options = ('param=', 'width=', 'height=', 'numtrees=')
	try:
		opts, args = gnu_getopt(args, 'hn:', flags + options)
		if len(args) > 2:
			raise GetoptError('expected 0, 1, or 2 positional arguments')
	except GetoptError as err:
		print('error:', err, file=stderr)
		print(normalize.__doc__)
		sysexit(2)
	opts = dict(opts)
	if '--help' in opts or '-h' in opts:
		print(normalize.__doc__)
		return
	setuplogging(opts)
	limit = opts.get('--numtrees', opts.get('-n'))
	limit = int(limit) if limit else None
	editor = TreeEditor(**getparams(opts))
	infilename = args[0] if args else '-'
	outfilename = (args[1] if len(args) == 2 and args[1] != '-'
			else stdout.fileno())
	cnt = failed = 0
	with openread(infilename) as inp, io.open(
			outfilename, 'w', encoding='utf8',
			closefd=not isinstance(outfilename, int)) as out:
		lines = ((n, line) for n, line in enumerate(inp, 1) if line.strip())
		for n, line in islice(lines, limit):
			try:
				editor.importtext(line)
			except BracketSyntaxError as err:
				logging.warning('line %d: %s', n, err)
				failed += 1
				continue
			out.write(editor.exporttext() + '\n')
			cnt += 1
	logging.info('%s: normalized %d trees, %d failed',
			infilename if infilename != '-' else 'stdin', cnt, failed)
	if failed:
		sysexit(1)


def layout(args=None):
	"""Usage: synforest layout [input] [options]

The complete input is read as a single tree in bracket notation. For every
node a tab-separated line is printed with: id, kind, label, x, y.

Options:
  --param=file      read layout parameters from file.
  --width=x         width of canvas and visible area.
  --height=x        height of visible area.
  --quiet           only report errors."""
	from .util import openread
	from .bracket import BracketSyntaxError
	from .editor import TreeEditor
	if args is None:
		args = argv[2:]
	flags = ('help', 'quiet')
	options = ('param=', 'width=', 'height=')
	try:
		opts, args = gnu_getopt(args, 'h', flags + options)
		if len(args) > 1:
			raise GetoptError('expected 0 or 1 positional arguments')
	except GetoptError as err:
		print('error:', err, file=stderr)
		print(layout.__doc__)
		sysexit(2)
	opts = dict(opts)
	if '--help' in opts or '-h' in opts:
		print(layout.__doc__)
		return
	setuplogging(opts)
	editor = TreeEditor(**getparams(opts))
	with openread(args[0] if args else '-') as inp:
		try:
			editor.importtext(inp.read())
		except BracketSyntaxError as err:
			print('error:', err, file=stderr)
			sysexit(1)
	for node in editor.forest:
		print('%d\t%s\t%s\t%g\t%g' % (
				node.id, node.kind, node.label, node.x, node.y))


if __name__ == '__main__':
	main()

__all__ = ['main', 'normalize', 'layout']
