"""
Main entry point for the brevit CLI.

This module is executed when running `python -m brevit` or via the `brevit` executable.
"""

from .cli import app


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
