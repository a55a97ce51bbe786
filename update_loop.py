"""
Caller-driven scheduling for the simulation.

Nothing here reads a wall clock or sleeps: whoever owns the loop (the
pygame front-end, the headless runner, a test) passes in elapsed
milliseconds and the loop turns that into ticks.
"""


class OneShotTimer:
    """A single countdown; starting it again replaces the running one."""

    def __init__(self):
        self.remaining_ms = 0
        self.callback = None

    @property
    def active(self):
        return self.callback is not None

    def start(self, duration_ms, callback):
        # Replace, never stack
        self.remaining_ms = duration_ms
        self.callback = callback

    def cancel(self):
        self.remaining_ms = 0
        self.callback = None

    def advance(self, elapsed_ms):
        """Count down; fire the callback once when the countdown reaches zero."""
        if not self.active:
            return False
        self.remaining_ms -= elapsed_ms
        if self.remaining_ms > 0:
            return False
        callback = self.callback
        self.cancel()
        callback()
        return True


class UpdateLoop:
    """
    Fixed-rate scheduler for a GameEngine.

    With equal periods the player and the ghosts move in the same tick.
    With different periods each side moves when its own period elapses,
    and ticks that are due together are merged into one.
    """

    def __init__(self, engine, player_period_ms, ghost_period_ms=None):
        assert player_period_ms > 0, "Tick period must be positive"
        self.engine = engine
        self.player_period_ms = player_period_ms
        self.ghost_period_ms = ghost_period_ms or player_period_ms
        assert self.ghost_period_ms > 0, "Tick period must be positive"
        self.player_due_ms = player_period_ms
        self.ghost_due_ms = self.ghost_period_ms
        self.ticks = 0

    @classmethod
    def for_engine(cls, engine):
        cfg = engine.config
        return cls(engine, cfg.player_tick_ms, cfg.ghost_tick_ms)

    def advance(self, elapsed_ms):
        """Apply pending input, run every tick due inside `elapsed_ms`; returns ticks played."""
        if self.engine.apply_requests():
            # A new game gets its first tick one full period after the start
            self.reset()
        ticks_run = 0

        while elapsed_ms > 0:
            step = min(elapsed_ms, self.player_due_ms, self.ghost_due_ms)
            elapsed_ms -= step
            self.player_due_ms -= step
            self.ghost_due_ms -= step
            self.engine.advance_clock(step)

            move_player = self.player_due_ms <= 0
            move_ghosts = self.ghost_due_ms <= 0
            if move_player:
                self.player_due_ms += self.player_period_ms
            if move_ghosts:
                self.ghost_due_ms += self.ghost_period_ms
            if move_player or move_ghosts:
                # Only ticks the engine actually played count
                if self.engine.tick(move_player=move_player, move_ghosts=move_ghosts):
                    self.ticks += 1
                    ticks_run += 1

        return ticks_run

    def run_ticks(self, count):
        """Advance by `count` player periods."""
        for _ in range(count):
            self.advance(self.player_period_ms)

    def reset(self):
        self.player_due_ms = self.player_period_ms
        self.ghost_due_ms = self.ghost_period_ms
