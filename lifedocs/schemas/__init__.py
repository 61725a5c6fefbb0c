"""Schema definitions for LifeDocs entities and value objects."""
