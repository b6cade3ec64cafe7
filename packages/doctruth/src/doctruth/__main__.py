from __future__ import annotations

from .cli.main import cli_entry

if __name__ == "__main__":
    cli_entry()
