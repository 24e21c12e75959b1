"""
Command-line front end for the student record store.

Usage:
    rollstore add --roll 101 --name Ana --class "10th Grade" --address "..." --score 88.5 --fee 1
    rollstore list
    rollstore show 101
    rollstore update 101 --score 91 --fee 1
    rollstore delete 101

The data file comes from --data-file, else ROLLSTORE_DATA_FILE, else
./student_records.dat.
"""

import argparse
import logging
import math
import sys
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import StoreSettings
from .core import Student, StoreException, DuplicateKeyError
from .storage.record_store import RecordStore

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_STORAGE = 3
EXIT_DUPLICATE = 4


console = Console()
err_console = Console(stderr=True)


def print_success(message: str):
    """Print a success message"""
    console.print(f"[bold green]✓[/bold green] {escape(message)}")


def print_info(message: str):
    """Print an info message"""
    console.print(f"[bold cyan]ℹ[/bold cyan] {escape(message)}")


def print_error(message: str):
    """Print an error message"""
    err_console.print(f"[bold red]✗ error:[/bold red] {escape(message)}")


def fee_label(student: Student) -> str:
    return "[green]PAID[/green]" if student.fee_paid else "[red]NOT PAID[/red]"


def print_student(student: Student):
    """Print one student as a two-column detail table"""
    table = Table(title=f"Student Details (Roll No: {student.roll_number})",
                  box=box.ROUNDED, show_header=False, min_width=44)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value")

    table.add_row("Name", escape(student.name))
    table.add_row("Class", escape(student.student_class))
    table.add_row("Address", escape(student.address))
    table.add_row("Total Score", f"{student.total_score:.2f}")
    table.add_row("Fee Status", fee_label(student))
    console.print(table)


def create_students_table(students: list[Student]) -> Table:
    table = Table(title="All Student Records", box=box.ROUNDED)
    table.add_column("Roll No", style="cyan", justify="right", no_wrap=True)
    table.add_column("Name", style="magenta")
    table.add_column("Class")
    table.add_column("Address")
    table.add_column("Score", style="green", justify="right")
    table.add_column("Fee Status")

    for s in students:
        table.add_row(str(s.roll_number), escape(s.name), escape(s.student_class),
                      escape(s.address), f"{s.total_score:.2f}", fee_label(s))
    return table


def roll_number(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid roll number: {text!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError("roll number must be a positive integer")
    return value


def score(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid score: {text!r}")
    if math.isnan(value) or math.isinf(value) or value < 0:
        raise argparse.ArgumentTypeError("score must be a non-negative number")
    return value


def fee_status(text: str) -> bool:
    if text not in ("0", "1"):
        raise argparse.ArgumentTypeError("fee status must be 1 (paid) or 0 (not paid)")
    return text == "1"


def cmd_add(store: RecordStore, args) -> int:
    student = Student(
        roll_number=args.roll,
        name=args.name,
        student_class=args.student_class,
        address=args.address,
        total_score=args.score,
        fee_paid=args.fee,
    )
    store.append(student)
    print_success(f"Student record for {student.name} (Roll No: {student.roll_number}) added successfully!")
    return EXIT_OK


def cmd_list(store: RecordStore, args) -> int:
    students = list(store.scan_all())
    if not students:
        print_info("No student records found.")
        return EXIT_OK

    console.print(create_students_table(students))
    console.print(f"Total records found: {len(students)}")
    return EXIT_OK


def cmd_show(store: RecordStore, args) -> int:
    student = store.find_by_key(args.roll)
    if student is None:
        print_info(f"Student with Roll Number {args.roll} not found.")
        return EXIT_NOT_FOUND

    print_student(student)
    return EXIT_OK


def cmd_update(store: RecordStore, args) -> int:
    def apply(current: Student) -> Student:
        print_info("Record found. Current details:")
        print_student(current)
        return current.with_score(args.score, args.fee)

    if not store.update_by_key(args.roll, apply):
        print_info(f"Student with Roll Number {args.roll} not found.")
        return EXIT_NOT_FOUND

    print_success(f"Record for Roll No {args.roll} updated successfully!")
    return EXIT_OK


def cmd_delete(store: RecordStore, args) -> int:
    if not store.delete_by_key(args.roll):
        print_info(f"Student with Roll Number {args.roll} not found. No records deleted.")
        return EXIT_NOT_FOUND

    print_success(f"Student record for Roll No {args.roll} deleted successfully.")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rollstore", description="Student record store")
    parser.add_argument("--data-file", help="path of the record file (overrides ROLLSTORE_DATA_FILE)")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="overrides ROLLSTORE_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="add a new student record")
    add.add_argument("--roll", type=roll_number, required=True)
    add.add_argument("--name", required=True)
    add.add_argument("--class", dest="student_class", required=True)
    add.add_argument("--address", default="")
    add.add_argument("--score", type=score, required=True)
    add.add_argument("--fee", type=fee_status, required=True, help="1=paid, 0=not paid")
    add.set_defaults(handler=cmd_add)

    lst = sub.add_parser("list", help="show all student records")
    lst.set_defaults(handler=cmd_list)

    show = sub.add_parser("show", help="show one student by roll number")
    show.add_argument("roll", type=roll_number)
    show.set_defaults(handler=cmd_show)

    update = sub.add_parser("update", help="change a student's score and fee status")
    update.add_argument("roll", type=roll_number)
    update.add_argument("--score", type=score, required=True)
    update.add_argument("--fee", type=fee_status, required=True, help="1=paid, 0=not paid")
    update.set_defaults(handler=cmd_update)

    delete = sub.add_parser("delete", help="delete a student record")
    delete.add_argument("roll", type=roll_number)
    delete.set_defaults(handler=cmd_delete)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point of the application."""
    args = build_parser().parse_args(argv)

    overrides = {}
    if args.data_file:
        overrides["data_file"] = args.data_file
    if args.log_level:
        overrides["log_level"] = args.log_level
    settings = StoreSettings(**overrides)

    logging.basicConfig(level=settings.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        store = RecordStore.from_settings(settings)
        return args.handler(store, args)
    except DuplicateKeyError as e:
        print_error(str(e))
        return EXIT_DUPLICATE
    except StoreException as e:
        print_error(str(e))
        return EXIT_STORAGE


if __name__ == "__main__":
    sys.exit(main())
