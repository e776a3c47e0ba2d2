"""CLI entry point: argument parsing and subcommand dispatch."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from readkit import __version__
from readkit.config import load_config, project_root_or_cwd, resolve_path


def setup_logging(verbose: bool = False, quiet: bool = False, project_root: Path | None = None) -> None:
    """
    Configure the readkit logger: level from --verbose/--quiet or config, console handler
    on stderr (stdout carries the demo output), optional file handler from config.
    """
    config = load_config(project_root)
    log_cfg = config.get("logging") or {}
    if verbose:
        level_name = "DEBUG"
    elif quiet:
        level_name = "ERROR"
    else:
        level_name = (log_cfg.get("level") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    root = logging.getLogger("readkit")
    root.setLevel(level)
    if not root.handlers:
        fmt = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(fmt)
        root.addHandler(console)
        log_file = log_cfg.get("file")
        if log_file:
            try:
                fh = logging.FileHandler(Path(log_file).expanduser(), encoding="utf-8")
                fh.setFormatter(fmt)
                root.addHandler(fh)
            except OSError:
                root.warning("Cannot open log file %s; logging to console only", log_file)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="readkit",
        description="Ten ways to read a file (and a URL), run side by side.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    log_group = parser.add_mutually_exclusive_group()
    log_group.add_argument("-v", "--verbose", action="store_true", help="Verbose (DEBUG) output.")
    log_group.add_argument("-q", "--quiet", action="store_true", help="Quiet (errors only).")

    # Same flags on subparsers so "readkit run -v" works
    global_flags = argparse.ArgumentParser(add_help=False)
    log_grp = global_flags.add_mutually_exclusive_group()
    log_grp.add_argument("-v", "--verbose", action="store_true", default=argparse.SUPPRESS, help=argparse.SUPPRESS)
    log_grp.add_argument("-q", "--quiet", action="store_true", default=argparse.SUPPRESS, help=argparse.SUPPRESS)

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    p_init = subparsers.add_parser("init", help="Create a .readkit project config directory.")
    p_init.add_argument("path", type=Path, nargs="?", default=Path("."), help="Directory to initialize (default: .).")
    p_init.set_defaults(run="init")

    p_run = subparsers.add_parser("run", help="Run all ten readers in order.", parents=[global_flags])
    p_run.add_argument("path", type=Path, nargs="?", default=Path("."), help="Project path (default: .).")
    p_run.add_argument(
        "--keep-going",
        action="store_true",
        help="Report a failing step and continue with the next one (default: stop at first failure).",
    )
    p_run.add_argument("--url", type=str, help="URL for step 10 (default: demo.url from config).")
    p_run.set_defaults(run="run")

    p_read = subparsers.add_parser("read", help="Run one reader (1-10).", parents=[global_flags])
    p_read.add_argument("number", type=int, help="Reader number, 1-10.")
    p_read.add_argument("name", nargs="?", help="Filename (URL for reader 10); default from config.")
    p_read.add_argument("--path", type=Path, default=Path("."), help="Project path (default: .).")
    p_read.set_defaults(run="read")

    p_list = subparsers.add_parser("list", help="List bundled and local resources.", parents=[global_flags])
    p_list.add_argument("path", type=Path, nargs="?", default=Path("."), help="Project path (default: .).")
    p_list.set_defaults(run="list")

    p_config = subparsers.add_parser("config", help="Show or edit configuration.", parents=[global_flags])
    p_config.add_argument("path", type=Path, nargs="?", default=Path("."), help="Project path for project-local config (default: .).")
    p_config.add_argument("--show", action="store_true", help="Display current settings.")
    p_config.add_argument("--set", dest="set_key", metavar="KEY=VALUE", help="Set a configuration value.")
    p_config.add_argument("--add", dest="add_key", metavar=("KEY", "VALUE"), nargs=2, help="Append VALUE to list KEY (e.g. ignore.additional_patterns PATTERN).")
    p_config.add_argument("--remove", dest="remove_key", metavar=("KEY", "VALUE"), nargs=2, help="Remove VALUE from list KEY.")
    p_config.add_argument("--global", dest="global_", action="store_true", help="With --set/--add/--remove: write to global config even when inside a project.")
    p_config.set_defaults(run="config")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    run = getattr(args, "run", None)
    if not run:
        parser.print_help()
        sys.exit(0)

    if hasattr(args, "path"):
        args.path = resolve_path(args.path)
    setup_logging(
        verbose=getattr(args, "verbose", False),
        quiet=getattr(args, "quiet", False),
        project_root=project_root_or_cwd(args.path),
    )

    if run == "init":
        from readkit.commands.init_cmd import run as cmd_run
    elif run == "run":
        from readkit.commands.run_cmd import run as cmd_run
    elif run == "read":
        from readkit.commands.read_cmd import run as cmd_run
    elif run == "list":
        from readkit.commands.list_cmd import run as cmd_run
    elif run == "config":
        from readkit.commands.config_cmd import run as cmd_run
    else:
        parser.print_help()
        sys.exit(0)

    cmd_run(args)


if __name__ == "__main__":
    main()
