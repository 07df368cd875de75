"""Core configuration for the Knit application."""
