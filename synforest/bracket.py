"""Read and write trees in square bracket notation.

A tree is written as ``[label child1 child2 ...]`` where each child is either
a nested bracketed tree or a bare token, as in ``[NP [Det the] [N dog]]``.
Labels and tokens are runs of characters other than whitespace and square
brackets; there is no escaping mechanism.

>>> tree = parse('[S [NP [Det the] [N dog]] [VP barks]]')
>>> tree.label, [child.label for child in tree.children]
('S', ['NP', 'VP'])
>>> print(tree)
[S [NP [Det the] [N dog]] [VP barks]]
"""
import re
import logging
from collections import namedtuple
from operator import attrgetter
from .forest import CATEGORY, TERMINAL, ForestError

OPEN, CLOSE = '[', ']'
TOKENRE = re.compile(r'\[|\]|[^\s\[\]]+')
# labels matching this will not survive being written and read back
UNSAFELABELRE = re.compile(r'[\s\[\]]')
UNSAFETOKENRE = re.compile(r'[\[\]]')
ROOTLABEL = 'ROOT'  # label of the node wrapping a forest with several roots
# provisional coordinates of rebuilt nodes, before layout
REBUILDX, REBUILDDX = 100, 50
REBUILDY, REBUILDDY = 50, 100


class BracketSyntaxError(ValueError):
	"""Raised for malformed bracket notation.

	:attr pos: index of the offending token (for the tokenizer, the index of
		the offending character)."""

	def __init__(self, msg, pos):
		super(BracketSyntaxError, self).__init__(msg)
		self.pos = pos


class ParseStructure(object):
	"""The result of parsing a bracketed expression.

	:param children: list of ParseStructure objects, or None if there are
		none.
	:param leaftext: list of tokens (strings) directly under this node, or
		None if there are none.

	Child expressions and leaf tokens are kept apart; the order in which they
	were interleaved in the input is not recorded."""
	__slots__ = ('label', 'children', 'leaftext')

	def __init__(self, label, children=None, leaftext=None):
		self.label = label
		self.children = children
		self.leaftext = leaftext

	def __eq__(self, other):
		if not isinstance(other, ParseStructure):
			return False
		return (self.label == other.label
				and self.children == other.children
				and self.leaftext == other.leaftext)

	def __ne__(self, other):
		return not self.__eq__(other)

	def __repr__(self):
		return '%s(%r, %r, %r)' % (self.__class__.__name__,
				self.label, self.children, self.leaftext)

	def __str__(self):
		parts = [self.label]
		parts.extend(str(child) for child in self.children or ())
		parts.extend(self.leaftext or ())
		return '%s%s%s' % (OPEN, ' '.join(parts), CLOSE)


class ParserState(object):
	"""A token sequence with a cursor pointing at the next token."""
	__slots__ = ('tokens', 'pos')

	def __init__(self, tokens, pos=0):
		self.tokens = tokens
		self.pos = pos

	def exhausted(self):
		"""Test whether all tokens have been consumed."""
		return self.pos >= len(self.tokens)

	def peek(self):
		""":returns: the next token, or None at the end of input."""
		if self.pos < len(self.tokens):
			return self.tokens[self.pos]
		return None

	def advance(self):
		"""Consume the next token and return it."""
		token = self.tokens[self.pos]
		self.pos += 1
		return token

	def __repr__(self):
		return '%s(%r, %d)' % (self.__class__.__name__, self.tokens, self.pos)


ParseResult = namedtuple('ParseResult', ['structure', 'state'])


def tokenize(text):
	"""Split bracket notation into brackets and text tokens.

	>>> tokenize('[NP [Det the]\\n\\t[N dog]]')
	['[', 'NP', '[', 'Det', 'the', ']', '[', 'N', 'dog', ']', ']']
	"""
	tokens = []
	prev = 0
	for match in TOKENRE.finditer(text):
		gap = text[prev:match.start()]
		if gap.strip():  # not reachable with the current token pattern
			pos = prev + len(gap) - len(gap.lstrip())
			raise BracketSyntaxError(
					'could not tokenize input at index %d' % pos, pos)
		tokens.append(match.group())
		prev = match.end()
	return tokens


def _openexpr(state):
	"""Consume an opening bracket and a label.

	:returns: a new (label, children, leaftext) frame."""
	if state.peek() != OPEN:
		raise BracketSyntaxError(
				"expected '%s' at position %d" % (OPEN, state.pos), state.pos)
	state.advance()
	if state.exhausted():
		raise BracketSyntaxError(
				'unexpected end of input: expected label', state.pos)
	if state.peek() in (OPEN, CLOSE):
		raise BracketSyntaxError(
				'expected label at position %d' % state.pos, state.pos)
	return state.advance(), [], []


def parseexpr(state):
	"""Parse one bracketed expression starting at the cursor of ``state``.

	Nested expressions are handled with an explicit stack, so the nesting
	depth of the input is not limited by the recursion limit.

	:returns: a ParseResult with the ParseStructure and the state, whose
		cursor points just past the closing bracket.
	:raises BracketSyntaxError: on malformed input."""
	stack = [_openexpr(state)]
	while True:
		token = state.peek()
		if token is None:
			raise BracketSyntaxError(
					"expected '%s' at position %d" % (CLOSE, state.pos),
					state.pos)
		elif token == OPEN:
			stack.append(_openexpr(state))
		elif token == CLOSE:
			state.advance()
			label, children, leaftext = stack.pop()
			structure = ParseStructure(
					label, children or None, leaftext or None)
			if not stack:
				return ParseResult(structure, state)
			stack[-1][1].append(structure)
		else:
			stack[-1][2].append(state.advance())


def parse(text):
	"""Parse a string containing exactly one bracketed expression.

	>>> parse('[VP barks]')
	ParseStructure('VP', None, ['barks'])
	>>> parse('NP the]')
	Traceback (most recent call last):
	...
	synforest.bracket.BracketSyntaxError: expected '[' at position 0

	:returns: a ParseStructure.
	:raises BracketSyntaxError: on malformed input or trailing tokens."""
	structure, state = parseexpr(ParserState(tokenize(text)))
	if not state.exhausted():
		raise BracketSyntaxError('unexpected tokens after root expression '
				'at position %d' % state.pos, state.pos)
	return structure


def buildforest(structure, forest, parentid=None, depth=0):
	"""Add the nodes and edges for a ParseStructure to ``forest``.

	Every ParseStructure becomes a CATEGORY node; its leaf tokens, if any,
	become a single TERMINAL node with the tokens joined by spaces, attached
	after the child categories. Positions are provisional; run a layout
	afterwards.

	:param parentid: if given, the new subtree is attached to this node.
	:returns: the node created for ``structure``."""
	result = None
	agenda = [(structure, parentid, depth)]
	while agenda:
		item, parentid, depth = agenda.pop()
		x, y = REBUILDX + depth * REBUILDDX, REBUILDY + depth * REBUILDDY
		if isinstance(item, ParseStructure):
			node = forest.createnode(item.label, x, y, CATEGORY)
			if item.leaftext:
				agenda.append((' '.join(item.leaftext), node.id, depth + 1))
			if item.children:
				agenda.extend((child, node.id, depth + 1)
						for child in reversed(item.children))
		else:
			node = forest.createnode(item, x, y, TERMINAL)
		if parentid is not None:
			forest.createedge(parentid, node.id)
		if result is None:
			result = node
	return result


def _checklabel(node):
	"""Warn about labels that cannot be read back; return the label."""
	pattern = UNSAFETOKENRE if node.kind == TERMINAL else UNSAFELABELRE
	if pattern.search(node.label):
		logging.warning('label %r of node %r will not survive a round trip',
				node.label, node.id)
	return node.label


def writenode(forest, node):
	"""Write the subtree under ``node`` in bracket notation.

	Children are ordered by their horizontal position, left to right. Uses an
	explicit stack, so deeply nested trees do not hit the recursion limit.

	:raises ForestError: if the subtree contains a cycle."""
	done = {}  # node id => bracketed subtree
	pending = set()  # ids of nodes whose children are being written
	agenda = [(node, None)]
	while agenda:
		cur, children = agenda.pop()
		if cur.kind == TERMINAL:
			done[cur.id] = _checklabel(cur)
		elif children is None:
			if cur.id in pending:
				raise ForestError('cycle through node %d' % cur.id)
			pending.add(cur.id)
			children = sorted(forest.children(cur.id), key=attrgetter('x'))
			agenda.append((cur, children))
			agenda.extend((child, None) for child in reversed(children))
		else:
			pending.discard(cur.id)
			label = _checklabel(cur)
			inside = ' '.join(filter(None,
					(done.pop(child.id) for child in children)))
			if inside:
				done[cur.id] = '%s%s %s%s' % (OPEN, label, inside, CLOSE)
			else:
				done[cur.id] = '%s%s%s' % (OPEN, label, CLOSE)
	return done[node.id]


def serialize(forest):
	"""Write a forest in bracket notation.

	A forest with several roots is wrapped in a ``ROOT`` node, with the
	roots ordered by their horizontal position.

	>>> from synforest.forest import Forest
	>>> forest = Forest()
	>>> _ = forest.createnode('B', 200, 0), forest.createnode('A', 10, 0)
	>>> serialize(forest)
	'[ROOT [A] [B]]'

	:raises ForestError: if the forest has no roots."""
	roots = forest.roots()
	if not roots:
		raise ForestError('no nodes to export')
	if len(roots) == 1:
		return writenode(forest, roots[0])
	return '%s%s %s%s' % (OPEN, ROOTLABEL, ' '.join(writenode(forest, root)
			for root in sorted(roots, key=attrgetter('x'))), CLOSE)


__all__ = ['BracketSyntaxError', 'ParseStructure', 'ParserState',
		'ParseResult', 'tokenize', 'parseexpr', 'parse', 'buildforest',
		'writenode', 'serialize']
