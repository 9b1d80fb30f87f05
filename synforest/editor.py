"""An editing session: the operations a tree editor offers its user.

The session owns one forest and the layout parameters, and translates user
intents into store mutations. Connecting nodes always goes through
``reparent()`` so the forest stays acyclic and single-parented; importing
builds and lays out the new tree before the current forest is replaced."""
import logging
from .forest import Forest, ForestError, CATEGORY, TERMINAL, reparent
from .bracket import parse, buildforest, serialize
from .layout import DEFAULTS, autolayout, edgecoords

DEFAULTLABEL = 'Label'


class TreeEditor(object):
	"""Interactive construction of a forest.

	:param params: layout parameters; any of the keys of
		``synforest.layout.DEFAULTS``.

	>>> editor = TreeEditor()
	>>> roots = editor.importtext('[NP [Det the] [N dog]]')
	>>> editor.exporttext()
	'[NP [Det the] [N dog]]'
	"""

	def __init__(self, **params):
		for key in params:
			if key not in DEFAULTS:
				raise ValueError('unrecognized layout parameter: %r' % key)
		self.params = dict(DEFAULTS, **params)
		self.forest = Forest()

	def addnode(self, label, x, y, kind=CATEGORY):
		"""Create a node at the given position.

		A category without a label gets a placeholder label; a word without
		text is refused.

		:returns: the new node."""
		label = (label or '').strip()
		if not label:
			if kind == TERMINAL:
				raise ForestError('a word node needs a non-empty label')
			label = DEFAULTLABEL
		node = self.forest.createnode(label, x, y, kind)
		logging.debug('created node %r', node)
		return node

	def removenode(self, nodeid):
		"""Delete a node and its edges; no-op if absent."""
		self.forest.deletenode(nodeid)

	def removeedge(self, edgeid):
		"""Delete an edge; no-op if absent."""
		self.forest.deleteedge(edgeid)

	def relabel(self, nodeid, label):
		"""Change the label of a node.

		:returns: False if the node does not exist or the label is blank,
			in which case nothing changes."""
		node = self.forest.getnode(nodeid)
		label = (label or '').strip()
		if node is None or not label:
			return False
		node.label = label
		return True

	def move(self, nodeid, x, y):
		"""Set the position of a node; coordinates are clipped at zero.

		:returns: False if the node does not exist."""
		node = self.forest.getnode(nodeid)
		if node is None:
			return False
		node.x, node.y = max(0, x), max(0, y)
		return True

	def connect(self, parentid, childid):
		"""Make ``childid`` a child of ``parentid``, detaching it from its
		current parent.

		:raises StructuralRejection: if this would introduce a cycle.
		:raises ForestError: if one of the nodes does not exist.
		:returns: the new edge."""
		for nodeid in (parentid, childid):
			if nodeid not in self.forest:
				raise ForestError('no node with id %r' % nodeid)
		edge = reparent(self.forest, parentid, childid)
		logging.debug('connected %r', edge)
		return edge

	def layout(self):
		"""Recompute the positions of all nodes."""
		if not len(self.forest):
			logging.debug('no nodes to lay out')
			return
		autolayout(self.forest, **self.params)

	def importtext(self, text):
		"""Replace the current forest with a tree in bracket notation.

		:raises BracketSyntaxError: if the text cannot be parsed; on any error
			the current forest is left as it was.
		:returns: the list of roots of the new forest."""
		structure = parse(text.strip())
		forest = self.forest.emptycopy()
		buildforest(structure, forest)
		autolayout(forest, **self.params)
		self.forest = forest
		logging.info('imported tree with %d nodes', len(self.forest))
		return self.forest.roots()

	def exporttext(self):
		"""Write the current forest in bracket notation.

		:raises ForestError: if the forest is empty."""
		return serialize(self.forest)

	def clear(self):
		"""Remove all nodes and edges."""
		logging.info('cleared %d nodes', len(self.forest))
		self.forest.clear()

	def snapshot(self):
		"""The state of the session for a rendering front end."""
		result = self.forest.todict()
		result['lines'] = [
				dict(id=edgeid, x1=x1, y1=y1, x2=x2, y2=y2)
				for edgeid, x1, y1, x2, y2 in edgecoords(self.forest)]
		return result


__all__ = ['TreeEditor', 'DEFAULTLABEL']
