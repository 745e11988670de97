"""
Format and lint the code. Run from the repository root: `python devtools/lint.py`
"""

import subprocess
import sys

from rich import print as rprint

SOURCES = ["lean", "tests", "devtools"]

CHECKS = [
    ["usort", "format", *SOURCES],
    ["ruff", "check", "--fix", *SOURCES],
    ["black", *SOURCES],
]


def run_check(cmd: list[str]) -> bool:
    rprint(f"[bold green]❯ {' '.join(cmd)}[/bold green]")
    try:
        subprocess.run(cmd, check=True)
        return True
    except (OSError, subprocess.CalledProcessError) as e:
        rprint(f"[bold red]Error: {e}[/bold red]")
        return False
    finally:
        rprint()


def main() -> int:
    failed = [cmd[0] for cmd in CHECKS if not run_check(cmd)]
    if failed:
        rprint(f"[bold red]✗ Lint failed: {', '.join(failed)}[/bold red]")
        return 1
    rprint("[bold green]✔ Lint passed.[/bold green]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
