"""Cross-cutting pieces: error catalog, exception hierarchy, logging setup."""
