#!/usr/bin/env python3
"""
Spritesheet Exporter - unpacks sprites from packed texture atlases.

This is the main entry point for the application. It exports every sprite
sheet under the content root by default; run with --help for the options.
"""

import sys

from spritesheet_exporter.cli import main as cli_main


def main():
    """Main entry point for the application."""
    print("==== Spritesheet Exporter ====")

    try:
        status = cli_main()
    except KeyboardInterrupt:
        print("\nExiting Spritesheet Exporter...")
        status = 1
    sys.exit(status)


if __name__ == "__main__":
    main()
