"""Puzzle state representation and pour rules."""
