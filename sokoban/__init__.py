"""
Sokoban-on-ice board engine.

Modules:
- content.py: ground and occupant values and their capability predicates
- cell.py: Cell and its replacement primitives
- board.py: Board, directions, win/loss detection, text display
- moves.py: move resolution (slides, pushes, holes)
- game.py: GameSession with score and single-level undo
- levels.py: text level format and built-in levels
- encoder.py, env.py: NumPy observations and a Gymnasium-style wrapper
"""
