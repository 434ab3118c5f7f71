"""Product catalog browser with a Supabase -> REST -> in-memory fallback chain."""

__version__ = "0.1.0"
