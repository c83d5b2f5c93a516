"""LingoPal backend API."""
