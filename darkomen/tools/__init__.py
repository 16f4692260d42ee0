"""Command line dumpers for the game data files."""
