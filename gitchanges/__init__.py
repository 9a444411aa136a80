"""List and export file changes in Git repositories for CI environments."""

__version__ = "0.1.0"