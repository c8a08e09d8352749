import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest

from smartroad.scene import (
    draw_road,
    draw_statistics,
    draw_vehicle,
    load_image,
    road_markings,
)
from smartroad.statistics import Statistics
from smartroad.vehicles import Direction, Turn, Vehicle

BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)
RED = (255, 0, 0, 255)


@pytest.fixture
def surface():
    return pygame.Surface((700, 700))


@pytest.fixture
def fonts():
    pygame.font.init()
    return pygame.font.Font(None, 20), pygame.font.Font(None, 16)


def test_road_markings_include_borders_and_stay_inside():
    rects = road_markings()
    for border in [(230, 0, 1, 700), (470, 0, 1, 700), (0, 230, 700, 1), (0, 470, 700, 1)]:
        assert border in rects
    assert all(0 <= x and 0 <= y and x + w <= 700 and y + h <= 700 for x, y, w, h in rects)


def test_draw_road_without_background(surface):
    surface.fill((10, 20, 30))
    draw_road(surface)
    assert tuple(surface.get_at((270, 0))) == WHITE
    assert tuple(surface.get_at((350, 350))) == BLACK
    assert tuple(surface.get_at((5, 5))) == BLACK


def test_draw_road_stretches_background(surface):
    background = pygame.Surface((10, 10))
    background.fill((255, 0, 0))
    draw_road(surface, background)
    assert tuple(surface.get_at((0, 0))) == RED
    assert tuple(surface.get_at((699, 699))) == RED
    assert tuple(surface.get_at((270, 0))) == RED


def test_load_image_round_trip(tmp_path):
    image = pygame.Surface((7, 4))
    image.fill((255, 0, 0))
    path = tmp_path / "car.png"
    pygame.image.save(image, str(path))
    loaded = load_image(path)
    assert loaded.get_size() == (7, 4)
    assert tuple(loaded.get_at((3, 2)))[:3] == (255, 0, 0)


def test_load_image_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_image(tmp_path / "missing.png")


@pytest.mark.parametrize("angle", [0.0, 90.0, 180.0, 270.0])
def test_draw_vehicle_fills_its_box(surface, angle):
    image = pygame.Surface((10, 10))
    image.fill((255, 0, 0))
    vehicle = Vehicle(x=100, y=200, direction=Direction.EAST, turn=Turn.FORWARD, angle=angle)
    draw_vehicle(surface, vehicle, image)
    assert tuple(surface.get_at((125, 225))) == RED
    assert tuple(surface.get_at((90, 190))) == BLACK
    assert tuple(surface.get_at((160, 260))) == BLACK


def test_draw_statistics_clears_and_writes(surface, fonts):
    font, small_font = fonts
    surface.fill((255, 255, 255))
    draw_statistics(surface, Statistics(), font, small_font)
    assert tuple(surface.get_at((5, 5))) == BLACK
    title_area = [surface.get_at((x, y)) for x in range(50, 300) for y in range(30, 45)]
    assert any(tuple(p) != BLACK for p in title_area)
    below_text = [surface.get_at((x, 650)) for x in range(0, 700, 7)]
    assert all(tuple(p) == BLACK for p in below_text)