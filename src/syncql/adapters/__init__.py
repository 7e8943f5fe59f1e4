"""Framework adapters for syncql."""
