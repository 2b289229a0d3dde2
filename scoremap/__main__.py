"""Allow running ScoreMap as a module: python -m scoremap."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import configure_engine, init_db
from .settings import load_settings
from .app import ScoreMapApp


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if settings.database_url:
        configure_engine(settings.database_url)
    init_db()
    logging.getLogger(__name__).info("ScoreMap ready")

    app = QApplication(sys.argv)
    app.setApplicationName("ScoreMap")
    app.setOrganizationName("ScoreMap")

    window = ScoreMapApp(settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
