"""cmdbox - a personal command dispatcher with streaming Markdown output."""

__version__ = "0.1.0"
