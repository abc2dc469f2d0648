"""Per-entity CRUD menus for the interactive console."""

import logging
from datetime import date
from typing import Callable

from rich.console import Console
from rich.table import Table

from emr_manager.database import Database
from emr_manager.errors import EMRError, InvalidInput, NotFound, StorageFailure
from emr_manager.forms import DoctorForm, PatientForm, PatientHistoryForm, ProcedureForm, parse_changes, parse_record
from emr_manager.services import (
    DoctorService,
    EntityService,
    PatientHistoryService,
    PatientService,
    ProcedureService,
)

logger = logging.getLogger(__name__)


def format_value(value) -> str:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


class EntityMenu:
    """Create / Read / Read all / Update / Delete loop for one entity type."""

    TITLE = ""
    NAME = ""
    PLURAL = ""
    FORM = None
    KEY_TYPE = str
    # (field name, prompt label); the key field comes first
    FIELDS: tuple[tuple[str, str], ...] = ()

    def __init__(self, service: EntityService, console: Console):
        self.service = service
        self.console = console

    @property
    def options(self) -> list[tuple[str, Callable]]:
        key_label = self.FIELDS[0][1]
        return [
            (f"Create {self.NAME}", self.create),
            (f"Read {self.NAME} by {key_label}", self.read),
            (f"Read All {self.PLURAL}", self.read_all),
            (f"Update {self.NAME}", self.update),
            (f"Delete {self.NAME}", self.delete),
        ]

    def run(self) -> None:
        """Loop until the operator picks Back."""
        while True:
            options = self.options
            self.show_menu(options)
            choice = self.ask("Enter your choice: ")
            if choice == str(len(options) + 1):
                self.console.print("Returning to main menu\n")
                return
            if not choice.isdigit() or not 1 <= int(choice) <= len(options):
                self.console.print("[bold red]Invalid choice. Please try again.[/bold red]\n")
                continue
            _, action = options[int(choice) - 1]
            self.console.print()
            self.run_action(action)
            self.console.print()

    def show_menu(self, options) -> None:
        self.console.print(f"[bold blue]{self.TITLE}[/bold blue]")
        for number, (label, _) in enumerate(options, start=1):
            self.console.print(f"{number}. {label}")
        self.console.print(f"{len(options) + 1}. Back to Main Menu")

    def run_action(self, action) -> None:
        """Run one operation, reporting any EMR error instead of raising it."""
        try:
            action()
        except EMRError as e:
            match e:
                case InvalidInput(field, reason):
                    self.console.print(f"[bold red]Invalid input ({field}):[/bold red] {reason}")
                case NotFound():
                    self.console.print(f"[yellow]{e}[/yellow]")
                case StorageFailure(message, _):
                    logger.error("Storage failure: %s", message)
                    self.console.print(f"[bold red]Database error:[/bold red] {message}")

    # Operations

    def create(self) -> None:
        self.console.print(f"[bold]Create New {self.NAME}[/bold]")
        raw = {name: self.ask(f"Enter {label}: ") for name, label in self.FIELDS}
        record = parse_record(self.FORM, raw)
        if self.service.create(record):
            self.console.print(f"[bold green]{self.NAME} created successfully[/bold green]")
        else:
            self.console.print(f"[bold red]Failed to create {self.NAME.lower()}[/bold red]")

    def read(self) -> None:
        self.console.print(f"[bold]Read {self.NAME}[/bold]")
        record = self.service.get(self.ask_key())
        self.show_record(record)

    def read_all(self) -> None:
        self.console.print(f"[bold]Read All {self.PLURAL}[/bold]")
        self.show_records(self.service.get_all())

    def update(self) -> None:
        self.console.print(f"[bold]Update {self.NAME}[/bold]")
        record = self.service.get(self.ask_key())
        self.console.print("Current details:")
        self.show_record(record)

        raw_changes = {}
        for name, label in self.FIELDS[1:]:
            value = self.ask(f"Update {label} (leave empty to skip): ")
            if value:
                raw_changes[name] = value
        if not raw_changes:
            self.console.print("No changes entered")
            return

        changes = parse_changes(record, raw_changes)
        self.service.update_fields(record.key, changes)
        self.console.print(f"[bold green]{self.NAME} information has been updated[/bold green]")

    def delete(self) -> None:
        self.console.print(f"[bold]Delete {self.NAME}[/bold]")
        record = self.service.get(self.ask_key())
        self.show_record(record)
        answer = self.ask(f"Are you sure you want to delete this {self.NAME.lower()}? (y/n): ")
        if answer.lower() not in ("y", "yes"):
            self.console.print("Deletion cancelled")
            return
        if self.service.delete(record.key):
            self.console.print(f"[bold green]{self.NAME} deleted successfully[/bold green]")
        else:
            self.console.print(f"[bold red]Failed to delete {self.NAME.lower()}[/bold red]")

    # Input / output helpers

    def ask(self, prompt: str) -> str:
        return self.console.input(prompt).strip()

    def ask_key(self):
        name, label = self.FIELDS[0]
        while True:
            value = self.ask(f"Enter {label}: ")
            if not value:
                self.console.print("This field is required. Please enter a value.")
                continue
            try:
                return self.KEY_TYPE(value)
            except ValueError:
                raise InvalidInput(name, f"{label} must be a whole number") from None

    def show_record(self, record) -> None:
        table = Table(show_header=False, box=None)
        for name, label in self.FIELDS:
            table.add_row(f"[bold]{label}[/bold]", format_value(getattr(record, name)))
        self.console.print(table)

    def show_records(self, records: list) -> None:
        if not records:
            self.console.print(f"No {self.PLURAL.lower()} found")
            return
        table = Table(title=self.PLURAL)
        for _, label in self.FIELDS:
            table.add_column(label)
        for record in records:
            table.add_row(*(format_value(getattr(record, name)) for name, _ in self.FIELDS))
        self.console.print(table)


class DoctorMenu(EntityMenu):
    TITLE = "Doctors Management"
    NAME = "Doctor"
    PLURAL = "Doctors"
    FORM = DoctorForm
    FIELDS = (("id", "Doctor ID"), ("name", "Doctor Name"))


class ProcedureMenu(EntityMenu):
    TITLE = "Procedures Management"
    NAME = "Procedure"
    PLURAL = "Procedures"
    FORM = ProcedureForm
    FIELDS = (
        ("id", "Procedure ID"),
        ("name", "Procedure Name"),
        ("description", "Procedure Description"),
        ("duration", "Duration (minutes)"),
        ("doctor_id", "Doctor ID"),
    )


class PatientMenu(EntityMenu):
    TITLE = "Patient Management"
    NAME = "Patient"
    PLURAL = "Patients"
    FORM = PatientForm
    KEY_TYPE = int
    FIELDS = (
        ("mrn", "MRN"),
        ("fname", "First Name"),
        ("lname", "Last Name"),
        ("dob", "Date of Birth (YYYY-MM-DD)"),
        ("address", "Address"),
        ("state", "State"),
        ("city", "City"),
        ("zip", "Zip Code"),
        ("insurance", "Insurance"),
        ("email", "Email"),
    )


class PatientHistoryMenu(EntityMenu):
    TITLE = "Patient History Management"
    NAME = "Patient History"
    PLURAL = "Patient Histories"
    FORM = PatientHistoryForm
    FIELDS = (
        ("id", "History ID"),
        ("patient_id", "Patient MRN"),
        ("procedure_id", "Procedure ID"),
        ("date", "Date (YYYY-MM-DD)"),
        ("billing", "Billing Amount"),
        ("doctor_id", "Doctor ID"),
    )

    @property
    def options(self) -> list[tuple[str, Callable]]:
        return super().options + [("Read Histories by Patient MRN", self.read_by_patient)]

    def read_by_patient(self) -> None:
        self.console.print("[bold]Patient Histories by Patient[/bold]")
        value = self.ask("Enter Patient MRN: ")
        try:
            mrn = int(value)
        except ValueError:
            raise InvalidInput("patient_id", "Patient MRN must be a whole number") from None
        self.show_records(self.service.get_patient_histories_by_patient_id(mrn))


def build_menus(db: Database, console: Console) -> list[EntityMenu]:
    """Main-menu order: Patients, Patient History, Procedures, Doctors."""
    return [
        PatientMenu(PatientService(db), console),
        PatientHistoryMenu(PatientHistoryService(db), console),
        ProcedureMenu(ProcedureService(db), console),
        DoctorMenu(DoctorService(db), console),
    ]

