"""Infrastructure adapters: persistence and OAuth profile mapping."""
