#!/usr/bin/env python3

import sys
from pathlib import Path
from cli.render import render_categories, render_page, RULE
from services.forms import ViewState
from services.seed import seed_categories
from logger import get_logger

logger = get_logger()

SHELL_HELP = """Commands:
  add <name>      Create a category
  edit <id>       Select a category for renaming
  save [name]     Submit the rename (optionally with a new name)
  cancel          Close the edit form
  delete <id>     Delete a category (asks for confirmation)
  list            Show the page again
  reload          Fetch the category list again
  help            Show this help
  quit            Leave the shell"""


def confirm_with_input(prompt: str) -> bool:
    """Ask a yes/no question on stdin."""
    answer = input(f"\n{prompt} (yes/no): ").strip().lower()
    return answer == "yes"


def _load_or_exit(services):
    if not services.forms.load():
        logger.error(services.forms.load_error)
        sys.exit(1)


def _find_or_exit(services, category_id):
    record = services.store.get(category_id)
    if record is None:
        logger.error(f"Category with ID {category_id} not found.")
        sys.exit(1)
    return record


def cmd_list(args, services):
    """List all categories."""
    _load_or_exit(services)

    logger.info("\nCategories:")
    logger.info(RULE)
    for line in render_categories(services.store.list()):
        logger.info(line)


def cmd_create(args, services):
    """Create a new category."""
    _load_or_exit(services)

    forms = services.forms
    if not forms.submit_create(args.name):
        logger.error(forms.form_error)
        sys.exit(1)

    record = services.store.list()[0]
    logger.info(f"✓ Category created successfully with ID: {record.id}")
    logger.info(f"  Name: {record.name}")


def cmd_rename(args, services):
    """Rename a category by ID."""
    _load_or_exit(services)

    forms = services.forms
    forms.select(_find_or_exit(services, args.category_id))
    old_name = forms.edit_name

    if not forms.submit_rename(args.name):
        logger.error(forms.edit_error)
        sys.exit(1)

    new_name = services.store.get(args.category_id).name
    logger.info(f"✓ Category '{old_name}' renamed to '{new_name}'.")


def cmd_delete(args, services):
    """Delete a category by ID."""
    _load_or_exit(services)

    record = _find_or_exit(services, args.category_id)

    logger.info("\nCategory to delete:")
    logger.info(f"  ID: {record.id}")
    logger.info(f"  Name: {record.name}")

    confirm = (lambda prompt: True) if args.yes else confirm_with_input

    forms = services.forms
    if forms.request_delete(record, confirm):
        logger.info(f"✓ Category '{record.name}' deleted successfully.")
    elif forms.form_error:
        logger.error(forms.form_error)
        sys.exit(1)


def cmd_seed(args, services):
    """Create categories from a YAML seed file."""
    _load_or_exit(services)

    seed_file = Path(args.file)
    logger.info(f"\nSeeding categories from {seed_file}")
    logger.info(RULE)

    try:
        result = seed_categories(services.sync, seed_file)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(RULE)
    logger.info("\nSeeding complete!")
    logger.info(f"Created: {result.created}")
    logger.info(f"Skipped: {result.skipped}")
    logger.info(f"Failed: {result.failed}")
    logger.info(f"Total: {result.total}")

    if result.failed:
        sys.exit(1)


def run_shell(services, read=input, write=print, confirm=confirm_with_input):
    """Interactive category page: load once, then apply commands until quit.

    Args:
        services: Services container.
        read: Returns the next command line; EOFError ends the shell.
        write: Receives each output line.
        confirm: Delete confirmation callback.
    """
    forms = services.forms

    def show():
        for line in render_page(forms):
            write(line)

    forms.load()
    show()

    while True:
        try:
            line = read("catsync> ").strip()
        except (EOFError, KeyboardInterrupt):
            write("")
            return

        command, _, rest = line.partition(" ")
        rest = rest.strip()

        if not command:
            continue
        if command in ("quit", "exit"):
            return
        if command == "help":
            write(SHELL_HELP)
            continue
        if command == "reload":
            forms.load()
        elif forms.view is not ViewState.CONTENT:
            write("Nothing loaded; use 'reload' or 'quit'.")
            continue
        elif command == "add":
            forms.submit_create(rest)
        elif command == "edit":
            record = services.store.get(rest)
            if record is None:
                write(f"Category with ID {rest} not found.")
                continue
            forms.select(record)
        elif command == "save":
            forms.submit_rename(rest if rest else None)
        elif command == "cancel":
            forms.cancel_edit()
        elif command == "delete":
            record = services.store.get(rest)
            if record is None:
                write(f"Category with ID {rest} not found.")
                continue
            forms.request_delete(record, confirm)
        elif command != "list":
            write(f"Unknown command: {command} (try 'help')")
            continue

        show()


def cmd_shell(args, services):
    """Open the interactive category page."""
    print("\nCategory Manager")
    print(RULE)
    print("Type 'help' for commands.")
    run_shell(services)


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="List, create, rename and delete main categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.set_defaults(func=cmd_list)

    # categories create
    create_parser = categories_subparsers.add_parser(
        "create", help="Create a new category"
    )
    create_parser.add_argument("name", help="Name of the new category")
    create_parser.set_defaults(func=cmd_create)

    # categories rename
    rename_parser = categories_subparsers.add_parser(
        "rename", help="Rename a category by ID"
    )
    rename_parser.add_argument("category_id", help="ID of the category to rename")
    rename_parser.add_argument("name", help="New category name")
    rename_parser.set_defaults(func=cmd_rename)

    # categories delete
    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete a category by ID"
    )
    delete_parser.add_argument("category_id", help="ID of the category to delete")
    delete_parser.add_argument(
        "--yes", "-y", action="store_true", help="Skip the confirmation prompt"
    )
    delete_parser.set_defaults(func=cmd_delete)

    # categories seed
    seed_parser = categories_subparsers.add_parser(
        "seed", help="Create categories from a YAML seed file"
    )
    seed_parser.add_argument("file", help="YAML file listing category names")
    seed_parser.set_defaults(func=cmd_seed)

    # categories shell
    shell_parser = categories_subparsers.add_parser(
        "shell", help="Manage categories interactively"
    )
    shell_parser.set_defaults(func=cmd_shell)
