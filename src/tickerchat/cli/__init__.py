"""Command line front-end."""
