"""Daily record loaders."""
