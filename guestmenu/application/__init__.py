"""Application layer: services, ports, and DTOs."""
