__version__ = "1.0.0"

__all__ = [
    "__version__",
    "change",
    "cli",
    "config",
    "core",
    "execution",
    "reporting",
    "runner",
    "truth",
    "watch",
]
