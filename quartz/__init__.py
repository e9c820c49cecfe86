"""quartz: a small dynamically-typed expression language."""

__version__ = "0.1.0"
