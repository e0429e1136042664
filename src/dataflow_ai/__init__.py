"""Gemini-backed generation client and Mermaid ER diagram translator."""

__version__ = "0.1.0"
