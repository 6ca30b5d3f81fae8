"""cork - a minimal incremental build tool for C projects."""

__version__ = "0.1.0"
