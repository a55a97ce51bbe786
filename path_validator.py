#!/usr/bin/env python3
"""
Layout validation: the fixed mazes must be playable from the player start
"""

from collections import deque

from maze import Maze
from movement import DIRECTION_ORDER, attempt_move


class LayoutValidator:
    def __init__(self, maze):
        self.maze = maze

    def reachable_cells(self, start, ghost=False):
        """FLOOD FILL from start using the real movement rule (tunnels included)"""
        queue = deque([start])
        visited = {start}
        while queue:
            current = queue.popleft()
            for direction in DIRECTION_ORDER:
                neighbor = attempt_move(current, direction, self.maze, ghost=ghost)
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)
        return visited

    def unreachable_cells(self):
        """Open cells the player can never visit"""
        reachable = self.reachable_cells(self.maze.player_start)
        return [cell for cell in self.maze.open_cells() if cell not in reachable]

    def unreachable_pellets(self):
        reachable = self.reachable_cells(self.maze.player_start)
        return [pos for pos in self.maze.pellet_positions() if pos not in reachable]

    def stuck_ghosts(self):
        """Ghost starts with no legal move at all"""
        stuck = []
        for start in self.maze.ghost_starts:
            if len(self.reachable_cells(start, ghost=True)) == 1:
                stuck.append(start)
        return stuck

    def validate(self):
        """Return a list of problems; an empty list means the layout is fine"""
        problems = []
        for cell in self.unreachable_cells():
            problems.append(f"Cell {cell} is open but unreachable from the player start")
        for start in self.stuck_ghosts():
            problems.append(f"Ghost start {start} has no legal move")
        if self.maze.is_wall(self.maze.player_start):
            problems.append(f"Player start {self.maze.player_start} is a wall")
        return problems


def validate_layout(layout, ghost_only_gates=False):
    return LayoutValidator(Maze(layout, ghost_only_gates=ghost_only_gates)).validate()
