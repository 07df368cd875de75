"""API routers for the Knit application."""
