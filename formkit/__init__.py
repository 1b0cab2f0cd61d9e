"""Form widget descriptions with value checks, trace-aware logging and a trace-id WSGI middleware."""

__version__ = "0.1.0"

__all__ = [
    "choices",
    "colors",
    "dates",
    "inputs",
    "logger",
    "middleware",
    "numbers",
    "options",
    "switches",
    "uploads",
]