"""Bundled data files for junkctl."""
