"""List your GitHub pull requests with their latest human comments, reviews and review comments."""

__version__ = "0.1.0"