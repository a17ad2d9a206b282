"""Remote repository clients."""
