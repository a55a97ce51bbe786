import argparse
import random
import sys

import pygame

import config
from config import GameConfig
from game_state import (GameEngine, PHASE_MENU, PHASE_PAUSED, PHASE_GAME_OVER,
                        PHASE_WON)
from ghost_policy import MODE_REVERSED
from maze import WALL, GATE
from movement import UP, DOWN, LEFT, RIGHT, DIRECTION_ORDER, direction_name
from path_validator import LayoutValidator
from session_logger import GameSessionLogger
from update_loop import UpdateLoop

# Keyboard mapping: arrows steer, space pauses, Enter/R (re)starts
DIRECTION_KEYS = {
    pygame.K_UP: UP,
    pygame.K_DOWN: DOWN,
    pygame.K_LEFT: LEFT,
    pygame.K_RIGHT: RIGHT,
}
START_KEYS = (pygame.K_RETURN, pygame.K_r)


def clamp_frame_ms(elapsed_ms):
    """Frame time handed to the update loop, capped at MAX_FRAME_MS"""
    return min(elapsed_ms, config.MAX_FRAME_MS)


def dispatch_key(engine, key):
    """Forward one key press to the engine's input API; False means quit"""
    if key == pygame.K_ESCAPE:
        return False
    if key in DIRECTION_KEYS:
        engine.set_queued_direction(DIRECTION_KEYS[key])
    elif key == pygame.K_SPACE:
        engine.toggle_pause()
    elif key in START_KEYS:
        engine.start_or_reset()
    return True


class PacmanGame:
    def __init__(self, game_config=None, event_logger=None):
        self.engine = GameEngine(game_config, event_logger=event_logger)
        self.loop = UpdateLoop.for_engine(self.engine)
        self.cell_size = config.CELL_SIZE
        self.screen_width = self.engine.maze.width * self.cell_size
        self.screen_height = self.engine.maze.height * self.cell_size + config.HUD_HEIGHT

        pygame.init()
        self.screen = pygame.display.set_mode((self.screen_width, self.screen_height))
        pygame.display.set_caption("Pac-Man")

        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("arial", 20, bold=True)
        self.large_font = pygame.font.SysFont("arial", 36, bold=True)

        # Colors - Pacman style
        self.BLACK = (0, 0, 0)
        self.WHITE = (255, 255, 255)
        self.YELLOW = (255, 255, 0)
        self.BLUE = (33, 150, 243)
        self.DARK_BLUE = (0, 0, 139)
        self.PELLET_COLOR = (255, 183, 174)
        self.GATE_COLOR = (255, 182, 193)

        self.running = True

    def handle_events(self):
        """Handle user input"""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if not dispatch_key(self.engine, event.key):
                    self.running = False

    def cell_rect(self, pos):
        col, row = pos
        return pygame.Rect(col * self.cell_size, row * self.cell_size, self.cell_size, self.cell_size)

    def cell_center(self, pos):
        col, row = pos
        return (int((col + 0.5) * self.cell_size), int((row + 0.5) * self.cell_size))

    def draw_maze(self):
        maze = self.engine.maze
        for row in range(maze.height):
            for col in range(maze.width):
                kind = maze.cell_kind((col, row))
                if kind == WALL:
                    pygame.draw.rect(self.screen, self.BLUE, self.cell_rect((col, row)))
                elif kind == GATE:
                    rect = self.cell_rect((col, row))
                    pygame.draw.rect(self.screen, self.GATE_COLOR,
                                     (rect.x, rect.centery - 2, rect.width, 4))

    def draw_pellets(self, snapshot):
        for pos in snapshot['pellets']:
            radius = 7 if pos in snapshot['power_pellets'] else 3
            pygame.draw.circle(self.screen, self.PELLET_COLOR, self.cell_center(pos), radius)

    def draw_pacman(self, snapshot):
        center = self.cell_center(snapshot['player_pos'])
        radius = self.cell_size // 2 - 2
        pygame.draw.circle(self.screen, self.YELLOW, center, radius)
        # Mouth points the way Pac-Man is heading
        dx, dy = snapshot['player_direction']
        if (dx, dy) != (0, 0):
            tip = (center[0] + dx * radius, center[1] + dy * radius)
            side = (center[0] + dy * radius // 2 + dx * radius, center[1] + dx * radius // 2 + dy * radius)
            other = (center[0] - dy * radius // 2 + dx * radius, center[1] - dx * radius // 2 + dy * radius)
            pygame.draw.polygon(self.screen, self.BLACK, [center, side, tip, other])

    def draw_ghosts(self, snapshot):
        scared = snapshot['mode'] == MODE_REVERSED
        for ghost in snapshot['ghosts']:
            color = self.DARK_BLUE if scared else ghost['color']
            rect = self.cell_rect(ghost['pos']).inflate(-4, -4)
            pygame.draw.ellipse(self.screen, color, (rect.x, rect.y, rect.width, rect.height * 2 // 3 + 4))
            pygame.draw.rect(self.screen, color, (rect.x, rect.centery, rect.width, rect.height // 2))

    def draw_ui(self, snapshot):
        top = self.engine.maze.height * self.cell_size
        score_text = self.font.render(f"Score: {snapshot['score']}", True, self.WHITE)
        lives_text = self.font.render(f"Lives: {snapshot['lives']}", True, self.WHITE)
        self.screen.blit(score_text, (10, top + 10))
        self.screen.blit(lives_text, (self.screen_width - lives_text.get_width() - 10, top + 10))
        if snapshot['mode'] == MODE_REVERSED:
            seconds = snapshot['power_remaining_ms'] / 1000.0
            power_text = self.font.render(f"Power: {seconds:.1f}s", True, self.YELLOW)
            self.screen.blit(power_text, (self.screen_width // 2 - power_text.get_width() // 2, top + 10))

        messages = {
            PHASE_MENU: "Press ENTER to start",
            PHASE_PAUSED: "PAUSED",
            PHASE_GAME_OVER: "GAME OVER - press ENTER",
            PHASE_WON: "YOU WIN! - press ENTER",
        }
        message = messages.get(snapshot['phase'])
        if message:
            text = self.large_font.render(message, True, self.YELLOW)
            self.screen.blit(text, (self.screen_width // 2 - text.get_width() // 2,
                                    top // 2 - text.get_height() // 2))

    def draw(self):
        snapshot = self.engine.snapshot()
        self.screen.fill(self.BLACK)
        self.draw_maze()
        self.draw_pellets(snapshot)
        self.draw_pacman(snapshot)
        self.draw_ghosts(snapshot)
        self.draw_ui(snapshot)
        pygame.display.flip()

    def run(self):
        """Main game loop; the simulation runs on its own tick rate, not the FPS"""
        try:
            while self.running:
                self.handle_events()
                self.loop.advance(clamp_frame_ms(self.clock.tick(config.TARGET_FPS)))
                self.draw()
        except KeyboardInterrupt:
            print("\nGame interrupted by user")
        finally:
            print("Cleaning up resources...")
            pygame.quit()


def render_text(engine):
    """Text picture of the current state (headless mode)"""
    snapshot = engine.snapshot()
    maze = engine.maze
    overlay = {}
    for pos in maze.pellet_positions():
        if pos not in snapshot['pellets']:
            overlay[pos] = ' '
    ghost_char = 'g' if snapshot['mode'] == MODE_REVERSED else 'G'
    for ghost in snapshot['ghosts']:
        overlay[ghost['pos']] = ghost_char
    overlay[snapshot['player_pos']] = 'P'
    status = (f"tick {snapshot['tick']}  heading {direction_name(snapshot['player_direction'])}  "
              f"score {snapshot['score']}  lives {snapshot['lives']}  "
              f"mode {snapshot['mode']}  phase {snapshot['phase']}")
    return maze.display_maze(overlay) + "\n" + status


def run_headless(engine, ticks, seed=None, show_every=0):
    """Drive the engine without a window; Pac-Man turns at random"""
    rng = random.Random(seed)
    loop = UpdateLoop.for_engine(engine)
    engine.start_or_reset()
    for i in range(ticks):
        if rng.random() < 0.2:
            engine.set_queued_direction(rng.choice(DIRECTION_ORDER))
        loop.advance(loop.player_period_ms)
        if show_every and (i + 1) % show_every == 0:
            print(render_text(engine))
        if engine.is_terminal:
            break
    print(render_text(engine))
    return engine.snapshot()


def main(argv=None):
    p = argparse.ArgumentParser(description="Pac-Man maze-chase simulation")
    p.add_argument('--variant', choices=['classic', 'simple'], default='classic')
    p.add_argument('--headless', action='store_true', help='run without a window')
    p.add_argument('--ticks', type=int, default=600, help='ticks to run in headless mode')
    p.add_argument('--show-every', type=int, default=0, help='print the board every N ticks')
    p.add_argument('--seed', type=int, default=None)
    p.add_argument('--check-layout', action='store_true', help='validate the maze and exit')
    p.add_argument('--save-log', default=None, help='write the session event log to this JSON file')
    args = p.parse_args(argv)

    game_config = GameConfig.for_variant(args.variant, seed=args.seed)

    if args.check_layout:
        engine = GameEngine(game_config)
        problems = LayoutValidator(engine.maze).validate()
        for problem in problems:
            print(problem)
        print("Layout OK" if not problems else f"{len(problems)} layout problem(s)")
        return 1 if problems else 0

    event_logger = GameSessionLogger()
    if args.headless:
        engine = GameEngine(game_config, event_logger=event_logger)
        event_logger.maze = engine.maze
        run_headless(engine, args.ticks, seed=args.seed, show_every=args.show_every)
    else:
        game = PacmanGame(game_config, event_logger=event_logger)
        event_logger.maze = game.engine.maze
        game.run()

    if args.save_log:
        event_logger.save_session(args.save_log)
    return 0


if __name__ == "__main__":
    sys.exit(main())
