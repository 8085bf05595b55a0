"""A cooperative-threading teaching kernel with scheduling and synchronization primitives."""

__version__ = "0.1.0"

__all__ = [
    "bitmap",
    "keyedlist",
    "scheduler",
    "synch",
    "synchlist",
    "system",
    "thread",
    "threadtest",
    "utility",
]