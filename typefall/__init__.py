"""Terminal typing trainer with a classic timed test and a falling-words arcade mode."""

__version__ = "0.1.0"
