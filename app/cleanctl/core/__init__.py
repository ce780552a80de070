"""Core services: XDG paths, settings persistence, run log and engine."""
