"""Argument parsing functionality for Winch."""

import argparse


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="winch",
        description=(
            "Winch - Automatic Cargo Dependency Resolver. Retries a failing "
            "cargo build with historical versions of the crates it reports "
            "as conflicting or missing, and writes the first working set "
            "back to Cargo.toml."
        ),
        add_help=True,
    )

    parser.add_argument("--dir",
                        dest="PROJECT_DIR",
                        help="Path to Rust project (default: current dir)",
                        action="store",
                        type=str,
                        default=None)

    return parser.parse_args(argv)
