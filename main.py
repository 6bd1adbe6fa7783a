#!/usr/bin/env python3
"""
TransTip - Main Entry Point

Opens the reader window and, unless disabled, registers the global
selection hotkey.

Usage:
    transtip                     # empty reader, paste text into it
    transtip notes.txt           # open a file in the reader
    transtip --no-hotkeys file   # reader only
"""
import sys
import argparse
import logging
import tkinter as tk
from typing import List, Optional

from config import get_default_config
from transtip.constants import VERSION, APP_NAME
from transtip.utils.logging_setup import setup_logging
from transtip.utils.single_instance import is_already_running


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="transtip",
        description=f"{APP_NAME} - translate selections in a tooltip"
    )
    parser.add_argument("file", nargs="?", help="UTF-8 text file to open in the reader")
    parser.add_argument("--no-hotkeys", action="store_true",
                        help="Do not register the global selection hotkey")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for TransTip."""
    args = create_parser().parse_args(argv)

    config = get_default_config()
    if config is None:
        print(f"{APP_NAME}: cannot create the config directory", file=sys.stderr)
        return 1

    setup_logging(level=logging.DEBUG if args.debug else logging.INFO)

    enable_hotkeys = not args.no_hotkeys and config.get_global_hotkeys_enabled()
    lock_socket = None
    if enable_hotkeys:
        already_running, lock_socket = is_already_running()
        if already_running:
            logging.warning("Another instance owns the global hotkey; starting without it")
            enable_hotkeys = False

    try:
        from transtip.app import TranslatorApp
        app = TranslatorApp(config, open_path=args.file, enable_hotkeys=enable_hotkeys)
        app.run()
        return 0
    except (OSError, tk.TclError) as e:
        logging.critical(f"Failed to start application: {e}")
        return 1
    finally:
        if lock_socket:
            lock_socket.close()


if __name__ == "__main__":
    sys.exit(main())
