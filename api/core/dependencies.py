"""
Request-scoped accessors for the objects `create_app` wires onto `app.state`.
"""

from __future__ import annotations

from fastapi import Request

from contact.mailer import Mailer
from files.storage import BlobStore

from .config import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_blob_store(request: Request) -> BlobStore:
    return request.app.state.blob_store


def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer


def get_repositories(request: Request) -> dict:
    """
    Table repositories keyed by table name.
    """
    return request.app.state.repositories
