"""Document analyses consumed by retrieval."""

from kontext.documents.models import DocumentContext, DocumentEntry

__all__ = ["DocumentContext", "DocumentEntry"]
