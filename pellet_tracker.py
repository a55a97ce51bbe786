
class PelletTracker:
    """Remaining pellets of the current maze, keyed by (col, row)."""

    def __init__(self, maze, power_pellets=True):
        self.maze = maze
        self.power_pellets = power_pellets
        self.pellets = {}
        self.total = 0
        self.reset()

    def reset(self):
        """Put every pellet of the maze back"""
        self.pellets = self.maze.pellet_positions(include_power=self.power_pellets)
        self.total = len(self.pellets)
        assert self.total > 0, "Pellet set is empty at initialization"

    def consume(self, position):
        """Remove the pellet at `position`; return its kind, or None if there is none."""
        return self.pellets.pop(tuple(position), None)

    def remaining(self):
        return len(self.pellets)

    def is_empty(self):
        return not self.pellets

    def positions(self, kind=None):
        if kind is None:
            return frozenset(self.pellets)
        return frozenset(pos for pos, pellet_kind in self.pellets.items() if pellet_kind == kind)

    def __contains__(self, position):
        return tuple(position) in self.pellets

    def __len__(self):
        return len(self.pellets)
