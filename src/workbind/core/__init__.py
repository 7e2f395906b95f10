"""Core building blocks: paths, naming, configuration and the registry context."""
