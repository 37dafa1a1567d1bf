"""
Triangular-tiling board game package.

Core modules:
- trigrid: triangular lattice addressing, parity and planar projection
- board: GameBoard, Tile and Piece
- shear: half-plane fold along one of the three lattice axes
- mutations: piece move/set
- commands: text command grammar
- textinput: raw characters -> command lines, terminal echo
- hittest: pointer -> cell picking
- session: action queue and per-tick game loop
- config / errors: settings, exception types, logging setup
- ui: Matplotlib viewer (BoardView)
"""
