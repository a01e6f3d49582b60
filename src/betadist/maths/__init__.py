__all__ = [
    "solve",
    "stats",
]
