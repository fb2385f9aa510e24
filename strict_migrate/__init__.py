"""strict-migrate: move a codebase under a stricter type-checking mode one file at a time."""

__version__ = "0.1.0"
