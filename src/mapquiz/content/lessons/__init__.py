"""Bundled lesson JSON files."""
