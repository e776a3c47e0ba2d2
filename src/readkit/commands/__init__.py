"""CLI subcommands. Each module exposes run(args)."""
