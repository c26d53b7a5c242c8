"""Bingo round materials: call sheet, slideshow and the movie pool."""
