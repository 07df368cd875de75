"""Operational scripts for the Knit server."""
