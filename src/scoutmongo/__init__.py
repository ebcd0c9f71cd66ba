"""scoutmongo — MongoDB collections as a search index for application records."""

__version__ = "0.1.0"
