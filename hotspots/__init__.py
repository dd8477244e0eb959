"""Find the most frequently changed functions in a git repository."""

__version__ = "0.1.0"
