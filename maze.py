import numpy as np

# Cell kinds stored in the grid
WALL = 1
FLOOR = 0
PELLET = 2
POWER_PELLET = 3
GATE = 4

LAYOUT_SYMBOLS = {
    '#': WALL,
    ' ': FLOOR,
    '.': PELLET,
    'o': POWER_PELLET,
    '-': GATE,
    'P': FLOOR,
    'G': FLOOR,
}

CELL_SYMBOLS = {WALL: '#', FLOOR: ' ', PELLET: '.', POWER_PELLET: 'o', GATE: '-'}


class Maze:
    """Fixed grid of cells, indexed [row, col]; positions are (col, row)."""

    def __init__(self, layout, ghost_only_gates=False):
        rows = list(layout)
        assert rows, "Maze layout is empty"
        widths = {len(row) for row in rows}
        assert len(widths) == 1, f"Maze layout is not rectangular (row widths {sorted(widths)})"

        self.height = len(rows)
        self.width = len(rows[0])
        self.ghost_only_gates = ghost_only_gates
        self.grid = np.zeros((self.height, self.width), dtype=int)
        self.player_start = None
        self.ghost_starts = []

        for row, line in enumerate(rows):
            for col, symbol in enumerate(line):
                assert symbol in LAYOUT_SYMBOLS, f"Unknown layout symbol {symbol!r} at ({col}, {row})"
                self.grid[row, col] = LAYOUT_SYMBOLS[symbol]
                if symbol == 'P':
                    assert self.player_start is None, "Maze layout has more than one player start"
                    self.player_start = (col, row)
                elif symbol == 'G':
                    self.ghost_starts.append((col, row))

        assert self.player_start is not None, "Maze layout has no player start"
        assert self.ghost_starts, "Maze layout has no ghost start"
        assert np.isin(self.grid, (PELLET, POWER_PELLET)).any(), "Maze layout has no pellets"

        # The maze never changes during a session
        self.grid.setflags(write=False)

    def in_bounds(self, position):
        col, row = position
        return 0 <= col < self.width and 0 <= row < self.height

    def cell_kind(self, position):
        assert self.in_bounds(position), f"Maze lookup out of bounds: {position}"
        col, row = position
        return int(self.grid[row, col])

    def is_wall(self, position, ghost=False):
        """Out-of-bounds cells count as walls; gates depend on who is asking."""
        if not self.in_bounds(position):
            return True
        kind = self.cell_kind(position)
        if kind == WALL:
            return True
        if kind == GATE:
            return ghost or not self.ghost_only_gates
        return False

    def pellet_positions(self, include_power=True):
        """Map every pellet-bearing cell to its kind."""
        pellets = {}
        rows, cols = np.nonzero(np.isin(self.grid, (PELLET, POWER_PELLET)))
        for row, col in zip(rows.tolist(), cols.tolist()):
            kind = int(self.grid[row, col])
            if kind == POWER_PELLET and not include_power:
                kind = PELLET
            pellets[(col, row)] = kind
        return pellets

    def open_cells(self, ghost=False):
        cells = []
        for row in range(self.height):
            for col in range(self.width):
                if not self.is_wall((col, row), ghost=ghost):
                    cells.append((col, row))
        return cells

    def display_maze(self, overlay=None):
        """Text picture of the maze; overlay maps (col, row) to a character."""
        overlay = overlay or {}
        lines = []
        for row in range(self.height):
            line = []
            for col in range(self.width):
                symbol = overlay.get((col, row))
                if symbol is None:
                    symbol = CELL_SYMBOLS[int(self.grid[row, col])]
                line.append(symbol)
            lines.append(''.join(line))
        return '\n'.join(lines)
