#!/usr/bin/env python3
"""
Game session event logger: console output plus an exportable event record
"""

import json
import os
import hashlib
from collections import defaultdict
from datetime import datetime

import numpy as np

import config


class GameSessionLogger:
    def __init__(self, maze=None, echo=None):
        self.maze = maze
        self.session_id = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.echo = config.ENABLE_GAME_EVENT_LOGGING if echo is None else echo
        self.events = []
        self.counters = defaultdict(int)

    def log_event(self, kind, tick, **data):
        """Record one engine event (and print it when console logging is on)"""
        event = {"kind": kind, "tick": tick}
        event.update(data)
        self.events.append(event)
        self.counters[kind] += 1

        if self.echo and (config.LOG_PELLET_EVENTS or kind != "pellet"):
            details = ", ".join(f"{key}={value}" for key, value in data.items())
            print(f"[tick {tick}] {kind}" + (f": {details}" if details else ""))

    def events_of(self, kind):
        return [event for event in self.events if event["kind"] == kind]

    def clear(self):
        self.events = []
        self.counters = defaultdict(int)

    def _get_maze_hash(self):
        """Generate unique hash for maze"""
        if self.maze is None:
            return None
        maze_bytes = np.ascontiguousarray(self.maze.grid).tobytes()
        return hashlib.md5(maze_bytes).hexdigest()

    def get_summary(self):
        """Counters and final numbers for the recorded session"""
        last_phase = None
        final_score = 0
        for event in self.events:
            if event["kind"] == "phase":
                last_phase = event.get("phase")
            if "score" in event:
                final_score = event["score"]

        return {
            "session_id": self.session_id,
            "maze_hash": self._get_maze_hash(),
            "total_events": len(self.events),
            "pellets_eaten": self.counters["pellet"],
            "power_pellets_eaten": self.counters["power_start"],
            "ghosts_eaten": self.counters["ghost_eaten"],
            "lives_lost": self.counters["life_lost"],
            "level_clears": self.counters["level_clear"],
            "final_phase": last_phase,
            "final_score": final_score,
        }

    def save_session(self, filepath=None):
        """Write the event record to JSON; returns the file path"""
        if filepath is None:
            filepath = os.path.join(config.SESSION_LOG_DIR, f"session_{self.session_id}.json")
        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)

        session_data = {
            "session_id": self.session_id,
            "timestamp": datetime.now().isoformat(),
            "maze_info": None,
            "summary": self.get_summary(),
            "events": self.events,
        }
        if self.maze is not None:
            session_data["maze_info"] = {
                "hash": self._get_maze_hash(),
                "size": f"{self.maze.height}x{self.maze.width}",
                "player_start": self.maze.player_start,
                "ghost_starts": self.maze.ghost_starts,
                "maze_data": self.maze.grid.tolist(),
            }

        with open(filepath, 'w') as f:
            json.dump(session_data, f, indent=2)

        if self.echo:
            print(f"Session log saved to {filepath}")
        return filepath
