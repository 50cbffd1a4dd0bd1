"""Moodlet engagement engine: streaks, points, badges, weekly reviews and the companion shop"""

__version__ = "0.1.0"
