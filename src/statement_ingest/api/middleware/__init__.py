"""Middleware for request logging and error rendering."""
