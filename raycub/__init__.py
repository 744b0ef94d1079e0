"""Grid raycasting with XPM textures, animated doors and a headless window system."""

__version__ = "0.1.0"