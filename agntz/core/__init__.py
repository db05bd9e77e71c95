"""Core utilities shared by the agntz commands."""
