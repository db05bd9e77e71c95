"""Command groups registered on the root agntz app."""
