"""Command-line interface for safewalk."""
