from rain_city.configuration import WIDTH, HEIGHT, PIXELS_PER_UNIT, SIDEWALK_WIDTH
from rain_city.renderer import to_screen, sidewalk_origin


class TestScreenMapping:
    def test_origin_is_window_center(self):
        assert to_screen(0, 0) == (WIDTH // 2, HEIGHT // 2)

    def test_sidewalk_origin_uses_each_screen_axis(self):
        offset = 8.5
        edge = offset - SIDEWALK_WIDTH / 2
        x, y = sidewalk_origin(offset)
        assert x == int(WIDTH / 2 + edge * PIXELS_PER_UNIT)
        assert y == int(HEIGHT / 2 + edge * PIXELS_PER_UNIT)

    def test_negative_sidewalk_left_of_and_above_center(self):
        x, y = sidewalk_origin(-8.5)
        assert x < WIDTH // 2
        assert y < HEIGHT // 2
