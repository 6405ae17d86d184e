"""Sort a flat folder of 'Artist - Song.mp3' files into per-artist folders."""

__version__ = "1.0.0"
