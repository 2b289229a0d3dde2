"""Shared pytest fixtures for ScoreMap tests."""

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from PyQt6.QtCore import QLocale
from PyQt6.QtWidgets import QApplication

from scoremap.database.db import configure_engine, init_db


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(scope="session", autouse=True)
def english_locale():
    """Pin number and date formatting so assertions don't depend on the host."""
    QLocale.setDefault(QLocale("en_US"))
    yield


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield
