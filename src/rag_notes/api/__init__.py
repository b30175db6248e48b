"""
HTTP surface for rag-notes.
"""

from rag_notes.api.app import create_app

__all__ = ["create_app"]
