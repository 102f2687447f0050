"""Print-Anything - page templates resolved into printable text."""

__version__ = "1.0.0"
