"""Command groups for the stamp CLI."""
