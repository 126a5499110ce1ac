"""BMP loading, flipping, scaling and saving, drawing to a Linux framebuffer, and small file utilities."""

__version__ = "0.1.0"