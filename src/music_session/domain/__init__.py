"""Domain layer: library data and playback session logic."""
