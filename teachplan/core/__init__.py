"""Core domain: models, ports and the extraction pipeline."""
