"""Cross-domain HTTP interfaces (health and similar probes)."""
