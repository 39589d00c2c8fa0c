"""wat — ask a chat completion endpoint what a file on disk is."""

__version__ = "0.1.0"
