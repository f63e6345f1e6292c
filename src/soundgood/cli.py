#!/usr/bin/env python3
"""Soundgood CLI for instrument rentals."""

import argparse
import sys

import questionary
from rich.console import Console
from rich.table import Table

from soundgood.errors import SoundgoodError
from soundgood.instrument.service import InstrumentService
from soundgood.lease.service import RentalService, TerminationService
from soundgood.logging_setup import configure_logging

console = Console()


def show_instruments(type_filter: str = None) -> None:
    """Print the instruments available for rent."""
    instruments = InstrumentService().list_instruments(type_filter)
    if not instruments:
        console.print("[yellow]No instruments available.[/]")
        return

    table = Table(title="Rentable instruments")
    for column in ("ID", "Type", "Brand", "Quality", "Price"):
        table.add_column(column)
    for i in instruments:
        table.add_row(str(i.id), i.type, i.brand, i.quality, str(i.price))
    console.print(table)


def show_leases(student_id: int) -> None:
    """Print a student's active leases."""
    leases = RentalService().list_student_leases(student_id)
    if not leases:
        console.print(f"[yellow]Student {student_id} has no active leases.[/]")
        return

    table = Table(title=f"Active leases of student {student_id}")
    for column in ("Lease", "Instrument", "Start", "End"):
        table.add_column(column)
    for lease in leases:
        table.add_row(
            str(lease.id),
            str(lease.instrument_id),
            lease.start_day.isoformat(),
            lease.end_day.isoformat(),
        )
    console.print(table)


def rent(student_id: int, instrument_id: int, end_day: str) -> None:
    lease_id = RentalService().create_lease(student_id, instrument_id, end_day)
    console.print(f"[green]Created lease {lease_id}.[/]")


def terminate(lease_id: int) -> None:
    TerminationService().terminate_lease(lease_id)
    console.print(f"[green]Terminated lease {lease_id}.[/]")


def is_id(value: str) -> bool:
    """True for a non-negative whole number that int() accepts."""
    try:
        return int(value) >= 0
    except ValueError:
        return False


def _ask_int(prompt: str) -> int | None:
    answer = questionary.text(prompt, validate=is_id).ask()
    return int(answer) if answer is not None else None


def interactive_shell() -> None:
    """Prompt for commands until the user quits."""
    while True:
        action = questionary.select(
            "What do you want to do?",
            choices=["List instruments", "Rent", "Terminate", "Student leases", "Quit"],
        ).ask()

        # User pressed Ctrl+C or Escape
        if action is None or action == "Quit":
            console.print("[dim]Bye.[/]")
            return

        try:
            if action == "List instruments":
                type_filter = questionary.text("Instrument type (blank for all):").ask()
                show_instruments(type_filter)
            elif action == "Rent":
                student_id = _ask_int("Student id:")
                instrument_id = _ask_int("Instrument id:")
                end_day = questionary.text("End day (YYYY-MM-DD):").ask()
                if None in (student_id, instrument_id, end_day):
                    continue
                if not questionary.confirm(
                    f"Rent instrument {instrument_id} to student {student_id} until {end_day}?"
                ).ask():
                    console.print("[dim]Cancelled.[/]")
                    continue
                rent(student_id, instrument_id, end_day)
            elif action == "Terminate":
                lease_id = _ask_int("Lease id:")
                if lease_id is None:
                    continue
                terminate(lease_id)
            elif action == "Student leases":
                student_id = _ask_int("Student id:")
                if student_id is None:
                    continue
                show_leases(student_id)
        except SoundgoodError as e:
            console.print(f"[red]{e.message}[/]")


def main(argv: list[str] = None) -> int:
    parser = argparse.ArgumentParser(description="Soundgood CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List rentable instruments")
    list_parser.add_argument("type", nargs="?", default="", help="Instrument type")

    rent_parser = subparsers.add_parser("rent", help="Rent an instrument to a student")
    rent_parser.add_argument("student_id", type=int)
    rent_parser.add_argument("instrument_id", type=int)
    rent_parser.add_argument("end_day", help="Last day is exclusive, YYYY-MM-DD")

    terminate_parser = subparsers.add_parser("terminate", help="Terminate a lease today")
    terminate_parser.add_argument("lease_id", type=int)

    leases_parser = subparsers.add_parser("leases", help="List a student's active leases")
    leases_parser.add_argument("student_id", type=int)

    subparsers.add_parser("shell", help="Interactive mode")

    args = parser.parse_args(argv)
    configure_logging()

    try:
        if args.command == "list":
            show_instruments(args.type)
        elif args.command == "rent":
            rent(args.student_id, args.instrument_id, args.end_day)
        elif args.command == "terminate":
            terminate(args.lease_id)
        elif args.command == "leases":
            show_leases(args.student_id)
        elif args.command == "shell":
            interactive_shell()
    except SoundgoodError as e:
        console.print(f"[red]{e.message}[/]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
