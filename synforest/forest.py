"""An editable forest of labeled nodes connected by parent-child edges.

Nodes and edges are kept in separate tables keyed by integer ids; structure
is only ever expressed through ids, so ancestry questions are queries over
the edge table rather than walks over live object references.

>>> forest = Forest()
>>> np = forest.createnode('NP', 0, 0)
>>> det = forest.createnode('the', 0, 0, TERMINAL)
>>> _ = forest.createedge(np.id, det.id)
>>> [a.label for a in forest.children(np.id)]
['the']
>>> forest.parent(det.id).label
'NP'
>>> [a.label for a in forest.roots()]
['NP']
"""
from itertools import count

CATEGORY = 'CAT'  # internal, phrasal node; written as a bracketed group
TERMINAL = 'WORD'  # leaf, word token; written as bare text
KINDS = (CATEGORY, TERMINAL)
NODEWIDTH, NODEHEIGHT = 100, 40


class ForestError(ValueError):
	"""Raised when an operation on a forest cannot be carried out."""


class StructuralRejection(ForestError):
	"""Raised when a new edge would introduce a cycle."""


class Node(object):
	"""A labeled node with a position on the canvas.

	:param kind: one of ``CATEGORY`` or ``TERMINAL``."""
	__slots__ = ('id', 'label', 'x', 'y', 'width', 'height', 'kind')

	def __init__(self, id, label, x, y, kind=CATEGORY):
		# pylint: disable=redefined-builtin
		if kind not in KINDS:
			raise ValueError('unrecognized node kind: %r' % kind)
		self.id = id
		self.label = label
		self.x = x
		self.y = y
		self.width = NODEWIDTH
		self.height = NODEHEIGHT
		self.kind = kind

	def isterminal(self):
		"""Test whether this node is a word token."""
		return self.kind == TERMINAL

	def todict(self):
		"""Return a JSON-serializable dictionary."""
		return dict(id=self.id, label=self.label, x=self.x, y=self.y,
				width=self.width, height=self.height, kind=self.kind)

	def __repr__(self):
		return '%s(%r, %r, %g, %g, %r)' % (self.__class__.__name__,
				self.id, self.label, self.x, self.y, self.kind)


class Edge(object):
	"""A directed relation from a parent node to a child node."""
	__slots__ = ('id', 'parentid', 'childid')

	def __init__(self, id, parentid, childid):
		# pylint: disable=redefined-builtin
		self.id = id
		self.parentid = parentid
		self.childid = childid

	def todict(self):
		"""Return a JSON-serializable dictionary."""
		return dict(id=self.id, parent=self.parentid, child=self.childid)

	def __repr__(self):
		return '%s(%r, %r, %r)' % (self.__class__.__name__,
				self.id, self.parentid, self.childid)


class Forest(object):
	"""A set of nodes and edges with structural queries.

	The store does not validate the shape of the graph: ``createedge`` will
	happily add a second parent or a cycle. Use ``reparent()`` to connect
	nodes while maintaining a forest; direct ``createedge`` calls are meant
	for rebuilding a structure that is known to be a tree.

	Ids are drawn from counters owned by this instance; they are never
	reused, not even after ``clear()``."""

	def __init__(self):
		self._nodes = {}
		self._edges = {}
		self._nodeids = count(1)
		self._edgeids = count(1)

	@property
	def nodes(self):
		"""The nodes in creation order."""
		return list(self._nodes.values())

	@property
	def edges(self):
		"""The edges in creation order."""
		return list(self._edges.values())

	def createnode(self, label, x, y, kind=CATEGORY):
		""":returns: a new node with a fresh id."""
		node = Node(next(self._nodeids), label, x, y, kind)
		self._nodes[node.id] = node
		return node

	def deletenode(self, nodeid):
		"""Remove node and all edges in which it occurs; no-op if absent."""
		if self._nodes.pop(nodeid, None) is None:
			return
		for edge in self.edges:
			if edge.parentid == nodeid or edge.childid == nodeid:
				del self._edges[edge.id]

	def createedge(self, parentid, childid):
		""":returns: a new edge; existence of the nodes is not checked."""
		edge = Edge(next(self._edgeids), parentid, childid)
		self._edges[edge.id] = edge
		return edge

	def deleteedge(self, edgeid):
		"""Remove an edge; no-op if absent."""
		self._edges.pop(edgeid, None)

	def getnode(self, nodeid):
		""":returns: the node with this id, or None."""
		return self._nodes.get(nodeid)

	def getedge(self, edgeid):
		""":returns: the edge with this id, or None."""
		return self._edges.get(edgeid)

	def findedge(self, parentid, childid):
		""":returns: the first edge from parentid to childid, or None."""
		for edge in self._edges.values():
			if edge.parentid == parentid and edge.childid == childid:
				return edge
		return None

	def children(self, nodeid):
		""":returns: list of child nodes, in the order the edges were made.

		Edges pointing to nodes that no longer exist are skipped."""
		return [self._nodes[edge.childid] for edge in self._edges.values()
				if edge.parentid == nodeid and edge.childid in self._nodes]

	def parent(self, nodeid):
		""":returns: the parent of the node, or None if it is a root."""
		for edge in self._edges.values():
			if edge.childid == nodeid:
				return self._nodes.get(edge.parentid)
		return None

	def roots(self):
		""":returns: nodes without incoming edge, in creation order."""
		haveparent = {edge.childid for edge in self._edges.values()}
		return [node for node in self._nodes.values()
				if node.id not in haveparent]

	def clear(self):
		"""Remove all nodes and edges; ids keep increasing afterwards."""
		self._nodes.clear()
		self._edges.clear()

	def emptycopy(self):
		"""An empty forest that continues the id sequences of this forest."""
		result = Forest()
		result._nodeids, result._edgeids = self._nodeids, self._edgeids
		return result

	def todict(self):
		"""Snapshot of the forest as JSON-serializable data."""
		return dict(
				nodes=[node.todict() for node in self._nodes.values()],
				edges=[edge.todict() for edge in self._edges.values()])

	def __contains__(self, nodeid):
		return nodeid in self._nodes

	def __iter__(self):
		return iter(self.nodes)

	def __len__(self):
		return len(self._nodes)

	def __repr__(self):
		return '<%s with %d nodes, %d edges>' % (
				self.__class__.__name__, len(self._nodes), len(self._edges))


def isancestor(forest, candidateid, nodeid):
	"""Test whether ``candidateid`` dominates ``nodeid``.

	Walks up from ``nodeid`` through its parents. Assumes the forest is
	acyclic, which holds as long as edges are added with ``reparent()``.

	>>> forest = Forest()
	>>> a, b, c = (forest.createnode(x, 0, 0) for x in 'ABC')
	>>> _ = forest.createedge(a.id, b.id)
	>>> _ = forest.createedge(b.id, c.id)
	>>> isancestor(forest, a.id, c.id), isancestor(forest, c.id, a.id)
	(True, False)
	"""
	node = forest.parent(nodeid)
	while node is not None:
		if node.id == candidateid:
			return True
		node = forest.parent(node.id)
	return False


def reparent(forest, parentid, childid):
	"""Attach ``childid`` as a child of ``parentid``.

	Any existing parent edge of the child is removed first, so every node
	keeps at most one parent.

	:raises StructuralRejection: if the child is the parent itself or one of
		its ancestors; the forest is not modified in that case.
	:returns: the new edge."""
	if parentid == childid:
		raise StructuralRejection(
				'cannot connect node %r to itself' % parentid)
	if isancestor(forest, childid, parentid):
		raise StructuralRejection('cannot create a cycle: node %r is '
				'already an ancestor of node %r' % (childid, parentid))
	oldparent = forest.parent(childid)
	if oldparent is not None:
		edge = forest.findedge(oldparent.id, childid)
		if edge is not None:
			forest.deleteedge(edge.id)
	return forest.createedge(parentid, childid)


__all__ = ['Node', 'Edge', 'Forest', 'ForestError', 'StructuralRejection',
		'isancestor', 'reparent', 'CATEGORY', 'TERMINAL', 'KINDS',
		'NODEWIDTH', 'NODEHEIGHT']
