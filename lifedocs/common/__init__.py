"""Common utilities shared across LifeDocs packages."""
