"""Building blocks for an autonomous AI development loop."""

__version__ = "0.1.0"