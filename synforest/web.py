"""Web interface to a tree editing session. Requires Flask.

Serves JSON to a browser front end, which takes care of drawing and of
pointer interaction; every request is handled by a single in-memory
``TreeEditor``. Meant for one user; run with a single-threaded server."""
from flask import Flask, Response
from flask import request, jsonify
from synforest.forest import ForestError, StructuralRejection, CATEGORY
from synforest.bracket import BracketSyntaxError
from synforest.editor import TreeEditor

LIMIT = 1024 * 10  # ~10KB
APP = Flask(__name__)
EDITOR = TreeEditor()


def getfield(name, default=None, cls=None):
	"""Look up a field in a JSON body or form.

	:param cls: if given, raise TypeError unless the value is an instance."""
	data = request.get_json(silent=True)
	if data is None:
		data = request.form
	value = data.get(name, default)
	if cls is not None and not isinstance(value, cls):
		raise TypeError('%s should be %s, not %r' % (
				name, cls.__name__, value))
	return value


def error(msg, status):
	"""Plain text error response."""
	return Response(msg, status=status, mimetype='text/plain')


@APP.route('/state')
def state():
	""" Nodes, edges and edge coordinates of the session. """
	return jsonify(EDITOR.snapshot())


@APP.route('/nodes', methods=['POST'])
def addnode():
	""" Create a node. """
	try:
		node = EDITOR.addnode(getfield('label', '', str),
				float(getfield('x', 0)), float(getfield('y', 0)),
				getfield('kind', CATEGORY, str))
	except (TypeError, ValueError) as err:
		return error(str(err), 400)
	return jsonify(node.todict())


@APP.route('/nodes/<int:nodeid>', methods=['DELETE'])
def removenode(nodeid):
	""" Delete a node and its edges. """
	EDITOR.removenode(nodeid)
	return jsonify(EDITOR.snapshot())


@APP.route('/nodes/<int:nodeid>/label', methods=['POST'])
def relabel(nodeid):
	""" Change the label of a node. """
	try:
		label = getfield('label', '', str)
	except TypeError as err:
		return error(str(err), 400)
	if not EDITOR.relabel(nodeid, label):
		return error('no such node or empty label', 400)
	return jsonify(EDITOR.forest.getnode(nodeid).todict())


@APP.route('/nodes/<int:nodeid>/move', methods=['POST'])
def move(nodeid):
	""" Set the position of a dragged node. """
	try:
		x, y = float(getfield('x')), float(getfield('y'))
	except (TypeError, ValueError) as err:
		return error(str(err), 400)
	if not EDITOR.move(nodeid, x, y):
		return error('no such node: %d' % nodeid, 404)
	return jsonify(EDITOR.forest.getnode(nodeid).todict())


@APP.route('/edges', methods=['POST'])
def connect():
	""" Connect a node as child of another node. """
	try:
		edge = EDITOR.connect(int(getfield('parent')), int(getfield('child')))
	except StructuralRejection as err:
		return error(str(err), 409)
	except (TypeError, ValueError) as err:
		return error(str(err), 400)
	return jsonify(edge.todict())


@APP.route('/edges/<int:edgeid>', methods=['DELETE'])
def removeedge(edgeid):
	""" Delete an edge. """
	EDITOR.removeedge(edgeid)
	return jsonify(EDITOR.snapshot())


@APP.route('/layout', methods=['POST'])
def layout():
	""" Recompute positions of all nodes. """
	EDITOR.layout()
	return jsonify(EDITOR.snapshot())


@APP.route('/import', methods=['POST'])
def importtree():
	""" Replace the session with a tree in bracket notation. """
	try:
		text = getfield('tree', '', str)
	except TypeError as err:
		return error(str(err), 400)
	if len(text.encode('utf8')) > LIMIT:
		return error('Too much data. Limit: %d bytes' % LIMIT, 413)
	try:
		EDITOR.importtext(text)
	except BracketSyntaxError as err:
		return error('Import failed: %s' % err, 400)
	return jsonify(EDITOR.snapshot())


@APP.route('/export')
def exporttree():
	""" The session in bracket notation. """
	try:
		return Response(EDITOR.exporttext(), mimetype='text/plain')
	except ForestError as err:
		return error(str(err), 400)


@APP.route('/clear', methods=['POST'])
def clear():
	""" Remove all nodes and edges. """
	EDITOR.clear()
	return jsonify(EDITOR.snapshot())


if __name__ == '__main__':
	APP.run(debug=True, host='0.0.0.0', threaded=False)
