from huntsplit.application.hunt_service import HuntService
from huntsplit.infrastructure.config_repository import ConfigRepository
from huntsplit.infrastructure.database.sqlite_repository import SQLiteHuntRepository
from huntsplit.infrastructure.logging_setup import configure_logging
from huntsplit.infrastructure.parser.log_parser import LogParser
from huntsplit.ui.main_window import MainApp


def main():
    config = ConfigRepository()
    configure_logging(config.get_log_level())

    # Dependency Injection Container (Manually)
    repository = SQLiteHuntRepository(config.get_db_path())
    service = HuntService(
        repository,
        code_attempts=config.get_code_attempts(),
        reconcile_attempts=config.get_reconcile_attempts(),
    )
    parser = LogParser()

    app = MainApp(service=service, repository=repository, parser=parser)
    app.mainloop()


if __name__ == "__main__":
    main()
