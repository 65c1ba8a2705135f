"""Error extraction, word location, span arbitration and incremental application."""
