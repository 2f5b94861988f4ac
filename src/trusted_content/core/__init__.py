"""Domain model, ports, services and use cases."""
