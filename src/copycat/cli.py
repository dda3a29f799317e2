#!/usr/bin/env python3
"""
copycat: Concatenate a project's source files into one labeled Markdown document

Common usage:
  copycat              Concatenate the current directory
  copycat path/to/repo
  copycat -o out.md    Write to out.md instead of the configured output
  copycat --list-files Show which files would be included

Settings live in copycat/copycat_config.toml under the project root. Files are
skipped if they are hidden (when ignore_hidden is set) or match an exclude
pattern from the config or from .gitignore. At most 100 files are included.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from copycat.config import (
    IGNORE_ENTRY,
    ConfigError,
    CopycatConfig,
    config_path,
    load_config,
    save_config,
)
from copycat.file_walker import FILE_LIMIT, TreeWalker, WalkerConfig, classify
from copycat.file_walker.emit import display_path, project_name, write_heading
from copycat.file_walker.gitignore import (
    GITIGNORE_NAME,
    append_ignore_entry,
    has_ignore_entry,
    load_gitignore_patterns,
)

log = logging.getLogger("copycat")


@dataclass
class Options:
    """Command-line options for the copycat tool."""

    root: str
    output: str | None
    yes: bool
    quiet: bool
    list_files: bool
    version: bool


def _parse_args(args: list[str] | None = None) -> Options:
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="copycat",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "root",
        nargs="?",
        type=str,
        default=".",
        help="Project root directory to concatenate (default: current directory)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Output file, overriding the `output` config setting "
        "(relative paths are resolved against the project root)",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Answer yes to all prompts (create a default config, update .gitignore)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report warnings and errors",
    )
    parser.add_argument(
        "--list-files",
        action="store_true",
        dest="list_files",
        help="Print the files that would be included without writing the output",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    return Options(
        root=opts.root,
        output=opts.output,
        yes=opts.yes,
        quiet=opts.quiet,
        list_files=opts.list_files,
        version=opts.version,
    )


def _setup_logging(quiet: bool) -> None:
    """Send copycat's log messages to the current stderr."""
    log.setLevel(logging.WARNING if quiet else logging.INFO)
    for old in list(log.handlers):
        log.removeHandler(old)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    log.addHandler(handler)


def _confirm(question: str, assume_yes: bool) -> bool:
    """Ask a yes/no question on stdin. End of input counts as no."""
    print(f"{question} (yes/y/no/n)")
    if assume_yes:
        return True
    try:
        answer = input()
    except EOFError:
        return False
    return answer.strip().lower() in ("yes", "y")


def _offer_default_config(path: Path, assume_yes: bool) -> int:
    if not _confirm("Config file not found. Create a default config file?", assume_yes):
        print("Exiting without creating a config file.")
        return 0
    save_config(CopycatConfig(), path)
    print(f"Default config created at {path}. Please review and run again.")
    return 0


def _offer_ignore_entry(root: Path, assume_yes: bool) -> None:
    """Offer to add copycat's directory to an existing `.gitignore`."""
    if not (root / GITIGNORE_NAME).is_file() or has_ignore_entry(root, IGNORE_ENTRY):
        return
    if _confirm(f"Add {IGNORE_ENTRY} to {GITIGNORE_NAME}?", assume_yes):
        append_ignore_entry(root, IGNORE_ENTRY)
        print(f"{IGNORE_ENTRY} added to {GITIGNORE_NAME}.")
    else:
        print(f"{IGNORE_ENTRY} not added to {GITIGNORE_NAME}.")


def _build_walker(root: Path, config: CopycatConfig, output_path: Path) -> TreeWalker:
    patterns = classify(config.exclude + load_gitignore_patterns(root))
    return TreeWalker(
        WalkerConfig(
            patterns=patterns,
            ignore_hidden=config.ignore_hidden,
            limit=FILE_LIMIT,
            skip_paths=frozenset({output_path}),
        )
    )


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the copycat CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 for config or usage errors, 2 for
        errors while walking or writing the output)
    """
    options = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("copycat")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    _setup_logging(options.quiet)

    root = Path(options.root).resolve()
    if not root.is_dir():
        print(f"Error: Not a directory: {options.root}", file=sys.stderr)
        return 1

    cfg_path = config_path(root)
    try:
        if not cfg_path.is_file():
            return _offer_default_config(cfg_path, options.yes)
        config = load_config(cfg_path)
        if not options.list_files:
            _offer_ignore_entry(root, options.yes)
        output_path = root / (options.output or config.output)
        walker = _build_walker(root, config, output_path)
    except (ConfigError, OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if options.list_files:
        try:
            for rel in walker.list_files(root):
                print(display_path(rel))
        except OSError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2
        return 0

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", encoding="utf-8", newline="") as out:
            write_heading(project_name(root), out)
            result = walker.walk(root, out)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if result.count >= FILE_LIMIT:
        log.warning("Stopped after the file limit (%d files).", FILE_LIMIT)
    shown = display_path(str(output_path))
    print(f"Concatenated codebase written to {shown} ({result.count} files)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
