"""RainBox: rain flooding a block landscape, frame by frame."""

__version__ = "0.1.0"
