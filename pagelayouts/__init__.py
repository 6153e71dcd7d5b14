"""pagelayouts: compose rendered pages from chained template layouts."""

__version__ = "0.1.0"
