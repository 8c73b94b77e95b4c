"""Web API for the catalog browser."""
