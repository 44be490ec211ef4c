"""Pygame front end for local two-player matches."""
