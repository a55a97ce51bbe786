import pytest

from config import GameConfig
from maze import Maze

# Player walks right into a pellet; ghost far away on the same corridor
CORRIDOR = (
    "#########",
    "#P.. o G#",
    "#########",
)

# Open room: power pellet next to the player, one spare pellet
ROOM = (
    "#########",
    "#Po    .#",
    "#       #",
    "#   G   #",
    "#########",
)

# Ghost shut in behind a gate it cannot cross
TRAPPED = (
    "########",
    "#P...-G#",
    "#.######",
    "########",
)

# One pellet, ghost shut in behind a gate
SINGLE_PELLET = (
    "######",
    "#P.-G#",
    "######",
)

# Ghost right next to where the player is about to step
AMBUSH = (
    "######",
    "#P G.#",
    "######",
)

# Ghost parked on the cell the player steps into first
STEP_ONTO = (
    "#####",
    "##.##",
    "#PG.#",
    "#####",
)

# Player and ghost face each other with no room to pass
HEAD_ON = (
    "######",
    "#PG..#",
    "######",
)

# Open row with a tunnel at both ends
TUNNEL = (
    "#####",
    "#.G.#",
    " P.  ",
    "#####",
)


def make_config(layout, **overrides):
    options = {'layout': layout, 'seed': 1}
    options.update(overrides)
    return GameConfig(**options)


@pytest.fixture
def corridor_maze():
    return Maze(CORRIDOR)


@pytest.fixture
def room_maze():
    return Maze(ROOM)


@pytest.fixture
def tunnel_maze():
    return Maze(TUNNEL)
