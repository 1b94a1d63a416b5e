"""The nine compliance gates, one module each."""
