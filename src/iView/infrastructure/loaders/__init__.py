from .document_loader import DocumentLoader, DocumentLoaderFactory

__all__ = ["DocumentLoader", "DocumentLoaderFactory"]
