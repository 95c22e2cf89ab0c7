"""
Dotty core Python package.

Pure game-state logic for the Dotty connect-the-dots puzzle, kept free of any
rendering or input-device code so the presentation layers stay thin.
Modules:
- constants.py: board size, palette size, move budget
- board.py: Token, Coord, Grid
- engine.py: GridEngine, SelectionOutcome, ResolveResult
- touch.py: pixel-to-cell mapping and the down/move/up gesture contract
- feedback.py: tone ladder and feedback events
- sessions.py: lock-guarded registry of live games
"""
