__all__ = [
    "test_distribution",
    "test_settings",
    "test_special",
]
