"""Drawing of the road, the vehicles and the statistics screen."""

from __future__ import annotations

from typing import List, Optional, Tuple

import pygame

from smartroad.statistics import QUIT_MESSAGE, TITLE, Statistics
from smartroad.vehicles import WORLD_SIZE, Vehicle

Rect = Tuple[int, int, int, int]

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
GREY = (200, 200, 200)

_LANE_LINES = (270, 310, 390, 430)


def road_markings() -> List[Rect]:
    """White lane dashes and road borders as ``(x, y, width, height)``."""
    rects: List[Rect] = []
    for i in range(0, WORLD_SIZE, 20):
        rects.extend((pos, i, 1, 10) for pos in _LANE_LINES)
        rects.extend((i, pos, 10, 1) for pos in _LANE_LINES)
    rects.extend(
        [
            (230, 0, 1, 700),
            (470, 0, 1, 700),
            (0, 230, 700, 1),
            (0, 470, 700, 1),
        ]
    )
    return rects


def draw_road(surface: pygame.Surface, background: Optional[pygame.Surface] = None) -> None:
    """Draw the road markings, then the intersection image stretched over them."""
    surface.fill(BLACK)
    for rect in road_markings():
        surface.fill(WHITE, pygame.Rect(rect))
    surface.fill(BLACK, pygame.Rect(230, 230, 470 - 229, 470 - 229))
    if background is not None:
        scaled = pygame.transform.scale(background, surface.get_size())
        surface.blit(scaled, (0, 0))


def load_image(path) -> pygame.Surface:
    """Load an image file; raises ``FileNotFoundError`` if it does not exist."""
    image = pygame.image.load(str(path))
    if pygame.display.get_init() and pygame.display.get_surface() is not None:
        image = image.convert_alpha()
    return image


def draw_vehicle(surface: pygame.Surface, vehicle: Vehicle, image: pygame.Surface) -> None:
    """Draw ``image`` in the vehicle's box, rotated clockwise by its angle."""
    target = pygame.Rect(vehicle.x, vehicle.y, vehicle.width, vehicle.height)
    scaled = pygame.transform.scale(image, target.size)
    rotated = pygame.transform.rotate(scaled, -vehicle.angle)
    surface.blit(rotated, rotated.get_rect(center=target.center))


def draw_statistics(
    surface: pygame.Surface,
    statistics: Statistics,
    font: pygame.font.Font,
    small_font: pygame.font.Font,
) -> None:
    """Clear the surface and draw the statistics screen."""
    surface.fill(BLACK)
    surface.blit(font.render(TITLE, True, WHITE), (50, 30))
    lines = statistics.lines()
    for i, text in enumerate(lines):
        surface.blit(small_font.render(text, True, GREY), (50, 80 + i * 40))
    surface.blit(small_font.render(QUIT_MESSAGE, True, WHITE), (50, 120 + len(lines) * 40))