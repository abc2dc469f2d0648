"""EMR manager console entry point."""

import logging

from rich.console import Console

from emr_manager.config import load_config
from emr_manager.database import Database, init_database
from emr_manager.errors import StorageFailure
from emr_manager.log import setup_logging
from emr_manager.menus import build_menus

logger = logging.getLogger(__name__)

console = Console()

MAIN_MENU_LABELS = ["Patients", "Patient History", "Procedures", "Doctors"]


def run(db: Database, console: Console) -> None:
    """Main menu loop; returns when the operator picks Exit."""
    menus = build_menus(db, console)
    exit_choice = str(len(menus) + 1)

    console.print("[bold blue]Welcome to EMR Management System[/bold blue]\n")
    while True:
        console.print("[bold blue]EMR Management System[/bold blue]")
        for number, label in enumerate(MAIN_MENU_LABELS, start=1):
            console.print(f"{number}. {label}")
        console.print(f"{exit_choice}. Exit")

        choice = console.input("[bold green]Enter your choice:[/bold green] ").strip()
        console.print()
        if choice == exit_choice:
            console.print("[bold blue]Thank you for using EMR Management System. Goodbye![/bold blue]")
            return
        if choice.isdigit() and 1 <= int(choice) <= len(menus):
            menus[int(choice) - 1].run()
        else:
            console.print("[bold red]Invalid choice. Please try again.[/bold red]\n")


def main() -> int:
    """Open the database, run the menus, and return the process exit code."""
    config = load_config()
    setup_logging(config.log_level)
    logger.debug("Loaded %r", config)

    db = Database(config)
    try:
        db.open()
        init_database(db)
    except StorageFailure as e:
        console.print(f"[bold red]Connection failed:[/bold red] {e.message}")
        db.close()
        return 1

    try:
        run(db, console)
    except (EOFError, KeyboardInterrupt):
        console.print("\n[bold blue]Goodbye![/bold blue]")
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
