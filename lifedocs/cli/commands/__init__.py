"""LifeDocs CLI commands package.

- create_document: Create a document directly or from an uploaded file
- get_document: Show one document by id
- list_documents: Page through an owner's documents

Shared sub-apps are created here and the commands are registered in main.py.
"""

from __future__ import annotations

import typer

documents_app = typer.Typer(name="documents", help="Create, show and list documents")

__all__ = ["documents_app"]
