"""
Global configuration for the maze-chase simulation.
"""

# Fixed maze layouts
# '#' wall, '.' pellet, 'o' power pellet, ' ' floor, '-' gate,
# 'P' player start, 'G' ghost start
CLASSIC_LAYOUT = (
    "###################",
    "#o.......#.......o#",
    "#.##.###.#.###.##.#",
    "#.................#",
    "#.##.#.#####.#.##.#",
    "#....#...#...#....#",
    "####.### # ###.####",
    "####.#  G G  #.####",
    "####.# ##### #.####",
    "-   .  G   G  .   -",
    "####.# ##### #.####",
    "####.#       #.####",
    "####.# ##### #.####",
    "#........#........#",
    "#.##.###.#.###.##.#",
    "#o.#.....P.....#.o#",
    "##.#.#.#####.#.#.##",
    "#....#...#...#....#",
    "#.######.#.######.#",
    "#.................#",
    "###################",
)

# Scoring
PELLET_SCORE = 10
POWER_PELLET_SCORE = 50
GHOST_EAT_SCORE = 200

# Lives
STARTING_LIVES = 3

# Timing (milliseconds)
TICK_MS = 100  # Classic variant: one 10 Hz loop for player and ghosts
POWER_DURATION_MS = 7000
SIMPLE_PLAYER_TICK_MS = 200
SIMPLE_GHOST_TICK_MS = 300

# Ghost behavior
GHOST_POLICY = "greedy"  # greedy | random
GHOST_EATEN_BEHAVIOR = "respawn"  # respawn | stay
ON_CLEAR = "win"  # win | reset
GHOST_NAMES = ["Blinky", "Pinky", "Inky", "Clyde"]
GHOST_COLORS = [(255, 0, 0), (255, 182, 193), (0, 255, 255), (255, 165, 0)]

# Rendering (pygame front-end only)
CELL_SIZE = 30
TARGET_FPS = 60
MAX_FRAME_MS = 100  # Cap frame time so a stalled window does not replay a burst of ticks
HUD_HEIGHT = 60

# Logging and Debugging
ENABLE_GAME_EVENT_LOGGING = True  # Print engine events to the console
LOG_PELLET_EVENTS = False  # Pellet events are noisy, keep them out of the console
SESSION_LOG_DIR = "session_logs"

GHOST_POLICIES = ("greedy", "random")
GHOST_EATEN_BEHAVIORS = ("respawn", "stay")
CLEAR_BEHAVIORS = ("win", "reset")


class GameConfig:
    """Everything that distinguishes one game variant from another."""

    def __init__(self, layout=CLASSIC_LAYOUT, power_pellets=True,
                 ghost_only_gates=True, ghost_policy=GHOST_POLICY,
                 ghost_eaten_behavior=GHOST_EATEN_BEHAVIOR, on_clear=ON_CLEAR,
                 player_tick_ms=TICK_MS, ghost_tick_ms=TICK_MS,
                 power_duration_ms=POWER_DURATION_MS,
                 starting_lives=STARTING_LIVES, pellet_score=PELLET_SCORE,
                 power_pellet_score=POWER_PELLET_SCORE,
                 ghost_eat_score=GHOST_EAT_SCORE, start_direction=(1, 0),
                 seed=None):
        if ghost_policy not in GHOST_POLICIES:
            raise ValueError(f"Unknown ghost policy: {ghost_policy!r}")
        if ghost_eaten_behavior not in GHOST_EATEN_BEHAVIORS:
            raise ValueError(f"Unknown ghost eaten behavior: {ghost_eaten_behavior!r}")
        if on_clear not in CLEAR_BEHAVIORS:
            raise ValueError(f"Unknown clear behavior: {on_clear!r}")
        if player_tick_ms <= 0 or ghost_tick_ms <= 0:
            raise ValueError("Tick periods must be positive")
        if starting_lives < 1:
            raise ValueError("starting_lives must be at least 1")

        self.layout = tuple(layout)
        self.power_pellets = power_pellets
        self.ghost_only_gates = ghost_only_gates
        self.ghost_policy = ghost_policy
        self.ghost_eaten_behavior = ghost_eaten_behavior
        self.on_clear = on_clear
        self.player_tick_ms = player_tick_ms
        self.ghost_tick_ms = ghost_tick_ms
        self.power_duration_ms = power_duration_ms
        self.starting_lives = starting_lives
        self.pellet_score = pellet_score
        self.power_pellet_score = power_pellet_score
        self.ghost_eat_score = ghost_eat_score
        self.start_direction = tuple(start_direction)
        self.seed = seed

    @classmethod
    def classic(cls, **overrides):
        """Power pellets, greedy ghosts, one 10 Hz loop, win on clear."""
        return cls(**overrides)

    @classmethod
    def simple(cls, **overrides):
        """No power pellets, random-walk ghosts, two loops, endless clears."""
        options = {
            'power_pellets': False,
            'ghost_policy': "random",
            'on_clear': "reset",
            'player_tick_ms': SIMPLE_PLAYER_TICK_MS,
            'ghost_tick_ms': SIMPLE_GHOST_TICK_MS,
        }
        options.update(overrides)
        return cls(**options)

    @classmethod
    def for_variant(cls, name, **overrides):
        if name == "classic":
            return cls.classic(**overrides)
        if name == "simple":
            return cls.simple(**overrides)
        raise ValueError(f"Unknown variant: {name!r}")
