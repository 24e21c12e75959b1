#!/usr/bin/env python3
"""
Walkthrough of the rollstore record store.

This example shows the full life of a data file:
- The fixed-width record layout
- Appending, scanning and looking up records
- Updating a score in place
- Deleting through the copy-and-replace path
- Text truncation at column capacity

Run with: python examples/student_example.py
Data is written to ./tmp/data/student_records.dat and left there afterwards.
"""

import os
import sys

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Add the project root to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from rollstore import RecordStore, Student, StudentCodec  # noqa: E402
from rollstore.core.record import STUDENT_DESC  # noqa: E402

console = Console()

DATA_FILE = os.path.join("tmp", "data", "student_records.dat")


def print_header(title: str, subtitle: str = ""):
    if subtitle:
        full_title = f"[bold blue]{title}[/bold blue]\n[dim]{subtitle}[/dim]"
    else:
        full_title = f"[bold blue]{title}[/bold blue]"

    console.print(Panel(full_title, style="bright_blue", box=box.DOUBLE, padding=(1, 2)))


def print_step(step_num: int, title: str, description: str = ""):
    """Print a step header"""
    step_text = f"[bold yellow]Step {step_num}: {title}[/bold yellow]"
    if description:
        step_text += f"\n[dim italic]{description}[/dim italic]"
    console.print(step_text)
    console.print()


def print_success(message: str):
    console.print(f"[bold green]✓[/bold green] {message}")


def print_info(message: str):
    console.print(f"[bold cyan]ℹ[/bold cyan] {message}")


def students_table(title: str, students) -> Table:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Roll No", style="cyan", justify="right")
    table.add_column("Name", style="magenta")
    table.add_column("Class")
    table.add_column("Score", style="green", justify="right")
    table.add_column("Fee Status")

    for s in students:
        fee = "[green]PAID[/green]" if s.fee_paid else "[red]NOT PAID[/red]"
        table.add_row(str(s.roll_number), s.name, s.student_class, f"{s.total_score:.2f}", fee)
    return table


def demonstrate_layout():
    print_step(1, "Record Layout", "Every student is stored as one fixed-width block")

    table = Table(title=f"Student record ({STUDENT_DESC.get_size()} bytes)", box=box.SIMPLE)
    table.add_column("Column", style="green")
    table.add_column("Type", style="magenta")
    table.add_column("Offset", style="cyan", justify="right")
    table.add_column("Size", style="yellow", justify="right")

    for column in STUDENT_DESC.columns:
        table.add_row(column.name, column.field_type.value, str(column.offset), str(column.size))
    if STUDENT_DESC.padding:
        table.add_row("(padding)", "-", str(STUDENT_DESC.data_size), str(STUDENT_DESC.padding))

    console.print(table)
    console.print()


def demonstrate_append(store: RecordStore):
    print_step(2, "Appending Records", "New records always go at the end of the file")

    students = [
        Student(101, "Ana", "10th Grade", "1 North St", 88.5, True),
        Student(102, "Ben", "10th Grade", "2 South St", 72.0, False),
        Student(103, "Chen", "11th Grade", "3 East St", 91.25, True),
    ]
    for s in students:
        store.append(s)
        print_success(f"Appended {s.name} (Roll No: {s.roll_number})")

    console.print(f"File size: {os.path.getsize(DATA_FILE)} bytes, records: {store.count()}")
    console.print()


def demonstrate_scan_and_find(store: RecordStore):
    print_step(3, "Scanning and Lookup", "Scans are lazy and can be iterated more than once")

    console.print(students_table("All Records", store.scan_all()))

    found = store.find_by_key(102)
    print_info(f"find_by_key(102) -> {found.name if found else None}")
    print_info(f"find_by_key(999) -> {store.find_by_key(999)}")
    console.print()


def demonstrate_update(store: RecordStore):
    print_step(4, "In-place Update", "Only the score and fee status can change")

    outcome = store.set_score(102, 79.5, True)
    print_info(f"set_score(102, 79.5, True) -> {outcome}")
    console.print(students_table("After Update", store.scan_all()))
    console.print()


def demonstrate_delete(store: RecordStore):
    print_step(5, "Delete", "Survivors are copied to a temporary file that replaces the original")

    print_info(f"delete_by_key(101) -> {store.delete_by_key(101)}")
    print_info(f"delete_by_key(101) again -> {store.delete_by_key(101)}")
    console.print(students_table("After Delete", store.scan_all()))
    console.print()


def demonstrate_truncation():
    print_step(6, "Text Truncation", "Over-long text is cut to fit its column, never rejected")

    codec = StudentCodec()
    long_name = "Bartholomew Alexander Montgomery-Fitzgerald the Third"
    decoded = codec.decode(codec.encode(Student(200, long_name, "12th", "", 50.0, False)))

    console.print(f"Original ({len(long_name)} chars): {long_name}")
    console.print(f"Stored   ({len(decoded.name)} chars): {decoded.name}")
    console.print()


def main():
    print_header("rollstore walkthrough", f"Data file: {DATA_FILE}")

    if os.path.exists(DATA_FILE):
        os.remove(DATA_FILE)

    store = RecordStore(DATA_FILE)

    demonstrate_layout()
    demonstrate_append(store)
    demonstrate_scan_and_find(store)
    demonstrate_update(store)
    demonstrate_delete(store)
    demonstrate_truncation()

    stats = store.get_stats()
    print_success(f"Done: {stats.records_read} records read, {stats.records_written} written")


if __name__ == "__main__":
    main()
