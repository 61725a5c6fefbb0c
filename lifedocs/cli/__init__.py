"""LifeDocs CLI - Typer command-line interface for document management."""
