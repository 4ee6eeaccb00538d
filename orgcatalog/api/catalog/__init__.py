"""Read-only JSON resources over the organisation catalog."""
