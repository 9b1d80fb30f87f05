"""Build syntax trees and exchange them in bracket notation (synforest).

Main components:

- An editable forest of labeled category and word nodes, which refuses
  edges that would introduce a cycle.
- A reader and writer for trees in square bracket notation, such as
  ``[S [NP [Det the] [N dog]] [VP barks]]``.
- A deterministic layout which assigns canvas coordinates to every node.
"""
__version__ = '0.1.0'
