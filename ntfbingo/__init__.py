"""Name that Film bingo toolkit: cards, call sheets, slideshows and the stills database."""

__version__ = "0.1.0"
