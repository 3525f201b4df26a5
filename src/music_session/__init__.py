"""Music Session - playback session coordinator for a music player app."""

__version__ = "0.1.0"
