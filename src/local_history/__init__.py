"""Local history: time-stamped revisions of workspace files in a shadow tree."""

__version__ = "0.1.0"
