"""robots-interpreter command-line wrapper."""

__version__ = "0.1.0"
