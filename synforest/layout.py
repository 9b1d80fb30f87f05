"""Assign canvas coordinates to the nodes of a forest.

The layout depends only on the structure of the forest: each tree is drawn
top-down with the root on the first row, children spread left to right in
fixed-width slots centered under their parent. Afterwards the whole drawing
is moved to the center of the visible area."""
import io
import logging
import numpy as np

DEFAULTS = dict(
		canvaswidth=1200,  # width over which the roots are spread
		viewwidth=1200,  # size of the visible area used for centering
		viewheight=800,
		slotwidth=150,  # horizontal space reserved for each child
		rowheight=100,  # vertical distance between depths
		topmargin=80,  # vertical anchor of the root row, before centering
		leftmargin=100,  # horizontal anchor of the first root
		)


def readparam(filename):
	"""Read layout parameters from a file.

	:param filename: The file should contain a list of comma-separated
		``attribute=value`` pairs, e.g. ``viewwidth=800, rowheight=60``;
		it is read using ``eval('dict(%s)' % open(file).read())``.
		Missing attributes get their value from ``DEFAULTS``.
	:returns: a dictionary with a value for every key of ``DEFAULTS``."""
	with io.open(filename, encoding='utf8') as fileobj:
		params = eval('dict(%s)' % fileobj.read())  # pylint: disable=eval-used
	for key in params:
		if key not in DEFAULTS:
			raise ValueError('unrecognized option: %r' % key)
	return {key: params.get(key, value) for key, value in DEFAULTS.items()}


def layoutsubtree(forest, node, positions, depth, x, y,
		slotwidth=DEFAULTS['slotwidth'], rowheight=DEFAULTS['rowheight']):
	"""Compute positions for ``node`` and its descendants.

	:param positions: dictionary that is updated with node id => (x, y).
		A node that is already in it keeps its position and is not
		descended into again.
	:param x: horizontal anchor; the node is placed here and its children
		are centered around it.
	:param y: vertical anchor shared by all nodes of this tree; the row of a
		node is ``y + depth * rowheight``."""
	agenda = [(node, depth, x)]
	while agenda:
		node, depth, x = agenda.pop()
		if node.id in positions:
			continue
		positions[node.id] = (x, y + depth * rowheight)
		children = forest.children(node.id)
		start = x - len(children) * slotwidth / 2
		agenda.extend((child, depth + 1, start + n * slotwidth)
				for n, child in reversed(list(enumerate(children))))


def recenter(forest, viewwidth=DEFAULTS['viewwidth'],
		viewheight=DEFAULTS['viewheight']):
	"""Move all nodes so that the drawing is centered in the visible area.

	The bounding box takes the size of nodes into account; when the drawing
	is larger than the visible area, it is aligned at zero instead."""
	nodes = forest.nodes
	if not nodes:
		return
	coords = np.array([(node.x, node.y) for node in nodes], dtype=float)
	sizes = np.array([(node.width, node.height) for node in nodes],
			dtype=float)
	lower = coords.min(axis=0)
	upper = (coords + sizes).max(axis=0)
	view = np.array([viewwidth, viewheight], dtype=float)
	target = np.maximum(0, (view - (upper - lower)) / 2)
	coords += target - lower
	for node, (x, y) in zip(nodes, coords.tolist()):
		node.x, node.y = x, y


def autolayout(forest, canvaswidth=DEFAULTS['canvaswidth'],
		viewwidth=DEFAULTS['viewwidth'], viewheight=DEFAULTS['viewheight'],
		slotwidth=DEFAULTS['slotwidth'], rowheight=DEFAULTS['rowheight'],
		topmargin=DEFAULTS['topmargin'], leftmargin=DEFAULTS['leftmargin']):
	"""Assign a position to every node of the forest.

	Previous positions are ignored, so the result is fully determined by the
	structure and the parameters. With several roots, the n-th root is
	anchored at ``leftmargin + n * canvaswidth / (len(roots) + 1)``.

	>>> from synforest.forest import Forest
	>>> forest = Forest()
	>>> s, a, b = (forest.createnode(x, 0, 0) for x in 'SAB')
	>>> _ = forest.createedge(s.id, a.id), forest.createedge(s.id, b.id)
	>>> autolayout(forest, viewwidth=400, viewheight=240)
	>>> [(node.label, node.x, node.y) for node in forest]
	[('S', 225.0, 50.0), ('A', 75.0, 150.0), ('B', 225.0, 150.0)]
	"""
	roots = forest.roots()
	if not roots:
		return
	positions = {}
	for n, root in enumerate(roots):
		x = leftmargin + n * (canvaswidth / (len(roots) + 1))
		layoutsubtree(forest, root, positions, 0, x, topmargin,
				slotwidth, rowheight)
	for node in forest:
		if node.id in positions:
			node.x, node.y = positions[node.id]
	logging.debug('laid out %d trees with %d nodes',
			len(roots), len(positions))
	recenter(forest, viewwidth, viewheight)


def edgecoords(forest):
	"""Line segments for drawing the edges.

	Each edge runs from the bottom center of the parent to the top center of
	the child; edges with a missing endpoint are skipped.

	:returns: a list of ``(edgeid, x1, y1, x2, y2)`` tuples."""
	result = []
	for edge in forest.edges:
		parent = forest.getnode(edge.parentid)
		child = forest.getnode(edge.childid)
		if parent is None or child is None:
			continue
		result.append((edge.id,
				parent.x + parent.width / 2, parent.y + parent.height,
				child.x + child.width / 2, child.y))
	return result


__all__ = ['DEFAULTS', 'readparam', 'autolayout', 'layoutsubtree',
		'recenter', 'edgecoords']
