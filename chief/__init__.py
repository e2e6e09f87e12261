"""Terminal interface components and release update checks for an autonomous PRD agent."""

__version__ = "0.1.0"