"""Shared entry point handling for CLI commands."""

from __future__ import annotations

import argparse
import traceback
from collections.abc import Callable

from dicom_synth.core.exceptions import DicomSynthError


def subcommand_main(
    create_parser_fn: Callable[[], argparse.ArgumentParser],
    run_fn: Callable[[argparse.Namespace], int],
    argv: list[str] | None = None,
) -> int:
    """Parse arguments and run a command with standard error handling.

    Args:
        create_parser_fn: Function that creates and returns an ArgumentParser.
        run_fn: Function that executes the command given parsed args.
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code: 0 for success, 1 for failure.

    """
    parser = create_parser_fn()
    args = parser.parse_args(argv)
    try:
        return run_fn(args)
    except DicomSynthError as e:
        print(f"[-] {e.message}")
        return 1
    except Exception as e:
        print(f"[-] Command failed: {e}")
        if getattr(args, "verbose", False):
            traceback.print_exc()
        return 1
