"""CLI commands for joinboard."""
