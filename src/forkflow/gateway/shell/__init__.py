"""Tool availability and script execution."""
