"""Building blocks for exporting triaged SAST results, users and teams."""

__version__ = "0.1.0"