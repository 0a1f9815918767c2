from rainbox.core.config import RenderConfig


class Renderer:
    """Paints terrain, sky and water columns. Holds no state besides its config."""

    def __init__(self, config=None):
        self.config = config or RenderConfig()

    def draw_terrain_and_backdrop(self, canvas, landscape, raining):
        """Erases the whole canvas, so water has to be drawn again afterwards."""
        block = self.config.block_pixels
        sky_color = self.config.cloud_color if raining else self.config.sky_color
        canvas.set_fill_color(sky_color)
        canvas.fill_rect(0, 0, canvas.width, canvas.height)

        canvas.set_fill_color(self.config.land_color)
        for i, land in enumerate(landscape):
            pixel_height = land * block
            canvas.fill_rect(i * block, canvas.height - pixel_height, block, pixel_height)

    def draw_water(self, canvas, landscape, surface):
        block = self.config.block_pixels
        canvas.set_fill_color(self.config.water_color)
        for i, (land, level) in enumerate(zip(landscape, surface)):
            pixel_height = (level - land) * block
            if pixel_height <= 0:
                continue  # dry segment
            canvas.fill_rect(i * block, canvas.height - level * block, block, pixel_height)
