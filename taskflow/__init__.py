"""taskflow - personal task manager."""
