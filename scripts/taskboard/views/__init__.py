"""Textual screens and widgets for the board."""
