"""junkctl - Find junk files and move them to the trash safely."""

__version__ = "0.1.0"
