"""
Ghost decision policies.

Ghosts keep no memory between ticks: every decision is made from the
ghost position, the target (Pac-Man) and the current mode only.
"""

import random

from movement import DIRECTION_ORDER, NONE, attempt_move, manhattan_distance

MODE_PURSUIT = "pursuit"
MODE_REVERSED = "reversed"


def valid_directions(ghost_pos, maze):
    """Directions that actually move the ghost, in evaluation order"""
    directions = []
    for direction in DIRECTION_ORDER:
        if attempt_move(ghost_pos, direction, maze, ghost=True) != ghost_pos:
            directions.append(direction)
    return directions


def choose_direction(ghost_pos, target_pos, mode, maze):
    """
    Greedy chase or flee.

    In pursuit mode pick the move that brings the ghost closest to the
    target, in reversed mode the one that takes it farthest. Ties go to
    the first direction in UP, DOWN, LEFT, RIGHT order.
    """
    assert mode in (MODE_PURSUIT, MODE_REVERSED), f"Unknown mode: {mode}"
    best_direction = NONE
    best_distance = None

    for direction in valid_directions(ghost_pos, maze):
        new_pos = attempt_move(ghost_pos, direction, maze, ghost=True)
        distance = manhattan_distance(new_pos, target_pos)

        if best_distance is None:
            better = True
        elif mode == MODE_PURSUIT:
            better = distance < best_distance
        else:
            better = distance > best_distance

        if better:
            best_distance = distance
            best_direction = direction

    return best_direction


def random_direction(ghost_pos, maze, rng=random):
    """Uniform choice among every move that is not blocked"""
    directions = valid_directions(ghost_pos, maze)
    if not directions:
        return NONE
    return rng.choice(directions)


class GhostPolicy:
    """One policy, picked once per engine and applied to every ghost."""

    def __init__(self, kind="greedy", rng=None):
        if kind not in ("greedy", "random"):
            raise ValueError(f"Unknown ghost policy: {kind!r}")
        self.kind = kind
        self.rng = rng or random.Random()

    def __call__(self, ghost_pos, target_pos, mode, maze):
        if self.kind == "random":
            return random_direction(ghost_pos, maze, self.rng)
        return choose_direction(ghost_pos, target_pos, mode, maze)
