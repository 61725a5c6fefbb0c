"""Core domain logic: ports, pagination, errors and use cases."""
