"""cleanctl - Reclaim disk space from known cache, log and trash locations."""

__version__ = "0.1.0"
