import random

import config
from config import GameConfig
from maze import Maze, POWER_PELLET
from movement import NONE, DIRECTION_NAMES, attempt_move
from pellet_tracker import PelletTracker
from ghost_policy import GhostPolicy, MODE_PURSUIT, MODE_REVERSED
from update_loop import OneShotTimer

# Game phases
PHASE_MENU = "menu"
PHASE_PLAYING = "playing"
PHASE_PAUSED = "paused"
PHASE_GAME_OVER = "game_over"
PHASE_WON = "won"


class GameEngine:
    """
    Owns every piece of mutable simulation state and advances it one tick
    at a time. Input methods only record requests; the update loop applies
    them between ticks through apply_requests().
    """

    def __init__(self, game_config=None, maze=None, event_logger=None):
        self.config = game_config or GameConfig()
        self.maze = maze or Maze(self.config.layout, ghost_only_gates=self.config.ghost_only_gates)
        self.rng = random.Random(self.config.seed)
        self.ghost_policy = GhostPolicy(self.config.ghost_policy, self.rng)
        self.event_logger = event_logger
        self.power_timer = OneShotTimer()

        # Game state
        self.phase = PHASE_MENU
        self.tick_count = 0
        self._pause_requested = False
        self._restart_requested = False
        self.new_session()

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def new_session(self):
        """Replace all session state wholesale"""
        self.pellets = PelletTracker(self.maze, power_pellets=self.config.power_pellets)
        self.score = 0
        self.lives = self.config.starting_lives
        self.mode = MODE_PURSUIT
        self.level_clears = 0
        self.tick_count = 0
        self.power_timer.cancel()
        # Same seed, same ghost walk on every restart
        self.rng.seed(self.config.seed)

        self.pacman_pos = self.maze.player_start
        self.pacman_direction = self.config.start_direction
        self.pacman_next_direction = NONE

        self.ghosts = []
        self.create_ghosts()

    def create_ghosts(self):
        """One ghost per ghost start cell of the maze"""
        for i, start in enumerate(self.maze.ghost_starts):
            self.ghosts.append({
                'name': config.GHOST_NAMES[i % len(config.GHOST_NAMES)],
                'color': config.GHOST_COLORS[i % len(config.GHOST_COLORS)],
                'pos': start,
                'start_pos': start,
            })
        assert self.ghosts, "No ghosts to create"

    def reset_positions(self):
        """Pac-Man and ghosts back to their starts, score and pellets untouched"""
        self.pacman_pos = self.maze.player_start
        self.pacman_direction = self.config.start_direction
        self.pacman_next_direction = NONE
        for ghost in self.ghosts:
            ghost['pos'] = ghost['start_pos']

    def set_phase(self, phase):
        if phase == self.phase:
            return
        self.phase = phase
        self.log("phase", phase=phase, score=self.score, lives=self.lives)

    @property
    def is_terminal(self):
        return self.phase in (PHASE_GAME_OVER, PHASE_WON)

    # ------------------------------------------------------------------
    # Input API
    # ------------------------------------------------------------------

    def set_queued_direction(self, direction):
        direction = tuple(direction)
        assert direction in DIRECTION_NAMES, f"Unknown direction: {direction}"
        self.pacman_next_direction = direction

    def toggle_pause(self):
        self._pause_requested = not self._pause_requested

    def start_or_reset(self):
        self._restart_requested = True

    def apply_requests(self):
        """Apply input requests recorded since the last call (between ticks only).

        Returns True when a new session was started.
        """
        if self._restart_requested:
            self._restart_requested = False
            self._pause_requested = False
            self.new_session()
            self.set_phase(PHASE_PLAYING)
            return True

        if self._pause_requested:
            self._pause_requested = False
            if self.phase == PHASE_PLAYING:
                self.set_phase(PHASE_PAUSED)
            elif self.phase == PHASE_PAUSED:
                self.set_phase(PHASE_PLAYING)
        return False

    # ------------------------------------------------------------------
    # Timing
    # ------------------------------------------------------------------

    @property
    def power_remaining_ms(self):
        return self.power_timer.remaining_ms if self.power_timer.active else 0

    def advance_clock(self, elapsed_ms):
        """Run the power countdown; it stands still unless the game is playing"""
        if self.phase == PHASE_PLAYING:
            self.power_timer.advance(elapsed_ms)

    def start_power_mode(self):
        self.mode = MODE_REVERSED
        self.power_timer.start(self.config.power_duration_ms, self.end_power_mode)
        self.log("power_start", duration_ms=self.config.power_duration_ms)

    def end_power_mode(self):
        self.mode = MODE_PURSUIT
        self.log("power_end")

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self, move_player=True, move_ghosts=True):
        """Advance the simulation by one step; False (and no change) unless playing"""
        if self.phase != PHASE_PLAYING:
            return False
        self.tick_count += 1

        captured = False
        if move_player:
            self.move_pacman()
            self.eat_pellet()
            # Stepping onto a ghost counts before the ghosts get to move away.
            # This also catches head-on swaps.
            captured = self.check_collisions()
        if move_ghosts and not captured:
            self.move_ghosts()
            self.check_collisions()

        if self.phase == PHASE_PLAYING:
            self.check_level_clear()
        return True

    def move_pacman(self):
        # A queued turn gets one chance: taken if open, dropped if blocked
        if self.pacman_next_direction != NONE:
            if attempt_move(self.pacman_pos, self.pacman_next_direction, self.maze) != self.pacman_pos:
                self.pacman_direction = self.pacman_next_direction
            self.pacman_next_direction = NONE

        self.pacman_pos = attempt_move(self.pacman_pos, self.pacman_direction, self.maze)

    def eat_pellet(self):
        kind = self.pellets.consume(self.pacman_pos)
        if kind is None:
            return

        if kind == POWER_PELLET:
            self.score += self.config.power_pellet_score
            self.log("power_pellet", pos=self.pacman_pos, score=self.score)
            self.start_power_mode()
        else:
            self.score += self.config.pellet_score
            self.log("pellet", pos=self.pacman_pos, score=self.score)

    def move_ghosts(self):
        # Ghosts chase (or flee) Pac-Man's position after this tick's move
        target = self.pacman_pos
        for ghost in self.ghosts:
            direction = self.ghost_policy(ghost['pos'], target, self.mode, self.maze)
            ghost['pos'] = attempt_move(ghost['pos'], direction, self.maze, ghost=True)

    def check_collisions(self):
        """Resolve ghosts sharing Pac-Man's cell; True if Pac-Man was caught"""
        for ghost in self.ghosts:
            if ghost['pos'] != self.pacman_pos:
                continue

            if self.mode == MODE_REVERSED:
                self.score += self.config.ghost_eat_score
                self.log("ghost_eaten", ghost=ghost['name'], pos=ghost['pos'], score=self.score)
                if self.config.ghost_eaten_behavior == "respawn":
                    ghost['pos'] = ghost['start_pos']
                continue

            self.lives -= 1
            self.log("life_lost", ghost=ghost['name'], pos=self.pacman_pos, lives=self.lives)
            if self.lives <= 0:
                self.lives = 0
                self.power_timer.cancel()
                self.set_phase(PHASE_GAME_OVER)
            else:
                self.reset_positions()
            # One capture per tick
            return True
        return False

    def check_level_clear(self):
        if not self.pellets.is_empty():
            return

        if self.config.on_clear == "win":
            self.power_timer.cancel()
            self.mode = MODE_PURSUIT
            self.set_phase(PHASE_WON)
            return

        self.level_clears += 1
        self.log("level_clear", clears=self.level_clears, score=self.score)
        self.pellets.reset()
        self.power_timer.cancel()
        self.mode = MODE_PURSUIT
        self.reset_positions()

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def snapshot(self):
        """Copy of everything a renderer needs; safe to keep between ticks"""
        return {
            'width': self.maze.width,
            'height': self.maze.height,
            'player_pos': self.pacman_pos,
            'player_direction': self.pacman_direction,
            'ghosts': [
                {'name': ghost['name'], 'color': ghost['color'], 'pos': ghost['pos']}
                for ghost in self.ghosts
            ],
            'pellets': self.pellets.positions(),
            'power_pellets': self.pellets.positions(POWER_PELLET),
            'score': self.score,
            'lives': self.lives,
            'mode': self.mode,
            'phase': self.phase,
            'power_remaining_ms': self.power_remaining_ms,
            'level_clears': self.level_clears,
            'tick': self.tick_count,
        }

    def log(self, kind, **data):
        if self.event_logger is not None:
            self.event_logger.log_event(kind, self.tick_count, **data)
