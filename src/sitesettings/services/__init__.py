"""Service helpers used by the web layer and CLI."""
