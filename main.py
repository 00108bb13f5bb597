import logging

from nicegui import ui

from finance_tracker.app import App
from finance_tracker.config import settings
from finance_tracker.database import Database
from finance_tracker.services import FinanceState

logger = logging.getLogger(__name__)


def main():
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    database = Database(settings.database_url)
    database.init_db()

    state = FinanceState(database)
    state.activate()

    @ui.page('/')
    def index():
        App(state)

    logger.info("Starting %s on port %d", settings.app_title, settings.port)

    # Run NiceGUI
    ui.run(
        title=settings.app_title,
        native=settings.native,
        port=settings.port,
        window_size=settings.window_size if settings.native else None,
        reload=False,
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
