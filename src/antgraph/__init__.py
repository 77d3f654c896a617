"""antgraph — antenna frequency graph toolkit."""

__version__ = "0.1.0"
