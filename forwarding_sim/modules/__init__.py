"""Table models and loaders for the forwarding simulator."""
