"""Data handling for an AirPlay receiver: PIN art, DMAP metadata, volume, HLS playlists, features and plists."""

__version__ = "1.71.0"

__all__ = [
    "features",
    "metadata",
    "pin",
    "playlists",
    "plists",
    "volume",
]