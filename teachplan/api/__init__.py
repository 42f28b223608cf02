"""HTTP surface for the standards extraction pipeline."""
