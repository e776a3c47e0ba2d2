"""readkit: ten ways to read a file (and a URL) in Python."""

__version__ = "0.1.0"
