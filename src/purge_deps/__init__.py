"""Remove dependency-cache directories beneath a project tree."""

__version__ = "0.1.0"
