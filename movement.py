"""
Grid movement shared by Pac-Man and the ghosts.
"""

# Directions as (dcol, drow)
UP = (0, -1)
DOWN = (0, 1)
LEFT = (-1, 0)
RIGHT = (1, 0)
NONE = (0, 0)

# Fixed evaluation order, also the tie-break order for ghost decisions
DIRECTION_ORDER = (UP, DOWN, LEFT, RIGHT)

DIRECTION_NAMES = {UP: "UP", DOWN: "DOWN", LEFT: "LEFT", RIGHT: "RIGHT", NONE: "NONE"}


def direction_name(direction):
    return DIRECTION_NAMES[tuple(direction)]


def manhattan_distance(pos1, pos2):
    """Manhattan distance |x1-x2| + |y1-y2| (no tunnel shortcut)"""
    return abs(pos1[0] - pos2[0]) + abs(pos1[1] - pos2[1])


def attempt_move(position, direction, maze, ghost=False):
    """
    Move one cell in `direction`.

    The column wraps around the maze edge (tunnels), the row never does.
    A move into a wall is rejected and the original position is returned.
    """
    direction = tuple(direction)
    assert direction in DIRECTION_NAMES, f"Unknown direction: {direction}"
    if direction == NONE:
        return position

    col = (position[0] + direction[0]) % maze.width
    row = position[1] + direction[1]
    candidate = (col, row)

    if maze.is_wall(candidate, ghost=ghost):
        return position
    return candidate
