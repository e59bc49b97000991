"""Command-line and terminal UI front-ends for the pairs game."""
