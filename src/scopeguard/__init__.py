"""scopeguard - capability permission sets, subset checks and scope strings."""

__version__ = "0.1.0"
