"""
Storage module holding the raw uploaded PDF files.
"""

from .blob_store import BlobStore

__all__ = ["BlobStore"]
