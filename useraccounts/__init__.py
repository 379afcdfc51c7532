"""User account web application."""
