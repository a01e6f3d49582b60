__all__ = [
    "test_solve",
    "test_stats",
]
