"""
Snake Game Renderer - Pygame-based visualization of state snapshots.

The renderer only reads the dictionaries produced by GameState.to_dict(),
so it can draw live games and replay frames alike.
"""
import pygame
from typing import Any, Dict, Optional, Tuple


# Colors
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
BOARD_COLOR = (12, 10, 28)
GRID_COLOR = (40, 30, 70)
SNAKE_HEAD_COLOR = (0, 255, 170)
SNAKE_BODY_COLORS = [
    (0, 230, 150),
    (0, 200, 190),
    (0, 170, 230),
    (90, 130, 255),
    (160, 100, 255),
]
FOOD_COLOR = (255, 60, 120)
FOOD_PULSE_COLOR = (255, 170, 200)
FLASH_COLOR = (255, 255, 255, 60)
TEXT_COLOR = (220, 220, 220)
DIM_TEXT_COLOR = (150, 150, 150)
GAME_OVER_COLOR = (255, 100, 100)
RECORD_COLOR = (255, 215, 0)
OVERLAY_COLOR = (0, 0, 0, 170)


class GameRenderer:
    """
    Renders snake snapshots onto a pygame surface.

    Can render to a surface supplied by the caller or manage its own
    window (see StandaloneRenderer).
    """

    def __init__(
        self,
        cell_size: int = 25,
        surface: Optional[pygame.Surface] = None,
        offset: Tuple[int, int] = (0, 0)
    ):
        """
        Initialize the renderer.

        Args:
            cell_size: Size of each grid cell in pixels
            surface: Optional surface to render to
            offset: (x, y) offset of the board on the surface
        """
        self.cell_size = cell_size
        self.surface = surface
        self.offset_x, self.offset_y = offset

    def render(
        self,
        game_state: Dict[str, Any],
        surface: Optional[pygame.Surface] = None
    ) -> pygame.Surface:
        """
        Render the board for one snapshot.

        Args:
            game_state: Snapshot dictionary from GameState.to_dict()
            surface: Optional surface overriding the renderer's own

        Returns:
            The surface that was rendered to
        """
        target = surface or self.surface

        if target is None:
            raise ValueError("No surface to render to")

        width = game_state.get("width", 20)
        height = game_state.get("height", 20)
        board_width, board_height = self.get_game_size(width, height)

        board_rect = pygame.Rect(self.offset_x, self.offset_y, board_width, board_height)
        pygame.draw.rect(target, BOARD_COLOR, board_rect)

        for x in range(width + 1):
            start = (self.offset_x + x * self.cell_size, self.offset_y)
            end = (self.offset_x + x * self.cell_size, self.offset_y + board_height)
            pygame.draw.line(target, GRID_COLOR, start, end)

        for y in range(height + 1):
            start = (self.offset_x, self.offset_y + y * self.cell_size)
            end = (self.offset_x + board_width, self.offset_y + y * self.cell_size)
            pygame.draw.line(target, GRID_COLOR, start, end)

        food = game_state.get("food")
        if food is not None:
            self._draw_food(target, food, game_state.get("just_ate_food", False))

        snake = game_state["snake"]
        # Draw tail first so the head ends up on top
        for i in range(len(snake) - 1, -1, -1):
            segment = snake[i]
            if i == 0:
                color = SNAKE_HEAD_COLOR
                inset, border_radius = 1, 6
            else:
                color = SNAKE_BODY_COLORS[i % len(SNAKE_BODY_COLORS)]
                inset, border_radius = 2, 4
            seg_rect = pygame.Rect(
                self.offset_x + segment["x"] * self.cell_size + inset,
                self.offset_y + segment["y"] * self.cell_size + inset,
                self.cell_size - inset * 2,
                self.cell_size - inset * 2
            )
            pygame.draw.rect(target, color, seg_rect, border_radius=border_radius)

        if snake:
            self._draw_eyes(target, snake[0], game_state.get("direction", 0))

        if game_state.get("flash_effect"):
            flash = pygame.Surface((board_width, board_height), pygame.SRCALPHA)
            flash.fill(FLASH_COLOR)
            target.blit(flash, (self.offset_x, self.offset_y))

        return target

    def _draw_food(self, surface: pygame.Surface, food: Dict[str, int], pulsing: bool):
        """Draw food, larger and brighter right after a bite."""
        cx = self.offset_x + food["x"] * self.cell_size + self.cell_size // 2
        cy = self.offset_y + food["y"] * self.cell_size + self.cell_size // 2
        radius = self.cell_size * 2 // 5
        color = FOOD_COLOR
        if pulsing:
            radius = self.cell_size // 2
            color = FOOD_PULSE_COLOR
        pygame.draw.circle(surface, color, (cx, cy), radius)

    def _draw_eyes(self, surface: pygame.Surface, head: Dict[str, int], direction: int):
        """Draw eyes on the snake's head."""
        cx = self.offset_x + head["x"] * self.cell_size + self.cell_size // 2
        cy = self.offset_y + head["y"] * self.cell_size + self.cell_size // 2

        eye_radius = max(2, self.cell_size // 8)
        eye_offset = self.cell_size // 4

        # Position eyes based on direction
        if direction == 0:  # RIGHT
            positions = [(cx + 2, cy - eye_offset), (cx + 2, cy + eye_offset)]
        elif direction == 1:  # DOWN
            positions = [(cx - eye_offset, cy + 2), (cx + eye_offset, cy + 2)]
        elif direction == 2:  # LEFT
            positions = [(cx - 2, cy - eye_offset), (cx - 2, cy + eye_offset)]
        else:  # UP
            positions = [(cx - eye_offset, cy - 2), (cx + eye_offset, cy - 2)]

        for pos in positions:
            pygame.draw.circle(surface, WHITE, pos, eye_radius)
            pygame.draw.circle(surface, BLACK, pos, eye_radius // 2)

    def get_game_size(self, grid_width: int, grid_height: int) -> Tuple[int, int]:
        """
        Get the pixel size needed for a game grid.

        Args:
            grid_width: Grid width in cells
            grid_height: Grid height in cells

        Returns:
            (width, height) in pixels
        """
        return (grid_width * self.cell_size, grid_height * self.cell_size)


class StandaloneRenderer(GameRenderer):
    """
    Renderer with its own window, score bar and overlays.
    Used for human play mode and replay viewing.
    """

    def __init__(
        self,
        grid_size: int = 20,
        cell_size: int = 25,
        title: str = "Neon Snake"
    ):
        """
        Initialize standalone renderer with its own window.

        Args:
            grid_size: Board width and height in cells
            cell_size: Size of each cell in pixels
            title: Window title
        """
        self.grid_size = grid_size

        padding = 40
        header = 60
        window_width = grid_size * cell_size + padding * 2
        window_height = grid_size * cell_size + padding * 2 + header

        pygame.init()
        surface = pygame.display.set_mode((window_width, window_height))
        pygame.display.set_caption(title)

        super().__init__(cell_size, surface, (padding, padding + header))

        self.window_width = window_width
        self.window_height = window_height
        self.font = pygame.font.Font(None, 36)
        self.small_font = pygame.font.Font(None, 26)
        self.large_font = pygame.font.Font(None, 72)
        self.clock = pygame.time.Clock()

    def render_frame(self, game_state: Dict[str, Any], fps: int = 60):
        """
        Draw a complete frame and flip the display.

        Args:
            game_state: Snapshot dictionary
            fps: Frame rate cap
        """
        self.surface.fill(BLACK)
        self.render(game_state)
        self._draw_scores(game_state)

        if game_state.get("game_over"):
            self._draw_game_over(game_state)
        elif game_state.get("paused"):
            self._draw_paused()

        pygame.display.flip()
        self.clock.tick(fps)

    def _draw_scores(self, game_state: Dict[str, Any]):
        score_text = self.font.render(f"Score: {game_state['score']}", True, TEXT_COLOR)
        self.surface.blit(score_text, (self.offset_x, 30))

        best_text = self.font.render(f"Best: {game_state.get('high_score', 0)}", True, RECORD_COLOR)
        self.surface.blit(
            best_text,
            (self.window_width - self.offset_x - best_text.get_width(), 30)
        )

    def _draw_overlay(self):
        board_width, board_height = self.get_game_size(self.grid_size, self.grid_size)
        overlay = pygame.Surface((board_width, board_height), pygame.SRCALPHA)
        overlay.fill(OVERLAY_COLOR)
        self.surface.blit(overlay, (self.offset_x, self.offset_y))

    def _blit_centered(self, text_surface, y: int):
        self.surface.blit(
            text_surface,
            (self.window_width // 2 - text_surface.get_width() // 2, y)
        )

    def _draw_paused(self):
        self._draw_overlay()
        center_y = self.window_height // 2
        self._blit_centered(self.large_font.render("PAUSED", True, TEXT_COLOR), center_y - 60)
        self._blit_centered(
            self.small_font.render("Space/P to resume", True, DIM_TEXT_COLOR),
            center_y + 20
        )

    def _draw_game_over(self, game_state: Dict[str, Any]):
        self._draw_overlay()
        center_y = self.window_height // 2
        self._blit_centered(
            self.large_font.render("GAME OVER", True, GAME_OVER_COLOR),
            center_y - 80
        )
        self._blit_centered(
            self.font.render(f"Score: {game_state['score']}", True, TEXT_COLOR),
            center_y - 10
        )

        score = game_state["score"]
        if score > 0 and score == game_state.get("high_score", 0):
            self._blit_centered(
                self.font.render("NEW RECORD!", True, RECORD_COLOR),
                center_y + 25
            )

        self._blit_centered(
            self.small_font.render("Enter or Space to play again", True, DIM_TEXT_COLOR),
            center_y + 65
        )

    def close(self):
        """Close the renderer and pygame."""
        pygame.quit()
