"""Feature modules: the tradux command line and the translation proxy API."""
