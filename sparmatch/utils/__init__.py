"""Stateless helpers shared across the application."""
