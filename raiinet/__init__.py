"""A two-player terminal strategy game of data links, viruses and server ports."""

__version__ = "1.0.0"