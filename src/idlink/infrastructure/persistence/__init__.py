"""Persistence implementations for idlink."""
