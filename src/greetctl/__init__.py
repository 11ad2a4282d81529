"""greetctl — interactive greeting console built on a small command/event core."""

__version__ = "0.1.0"
