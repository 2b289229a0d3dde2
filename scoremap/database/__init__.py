"""Database package."""

from .db import configure_engine, get_session, init_db
from .models import Block, Page
from .query import fetch_rows

__all__ = ["configure_engine", "get_session", "init_db", "Block", "Page", "fetch_rows"]
