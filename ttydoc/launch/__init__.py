"""Session detection, container invocation and fallback launch pipeline."""
