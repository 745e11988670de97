"""
Main entry point for the lean command line.
"""

import argparse
import sys
from typing import List, Optional

from lean.config.logger import get_logger, logging_setup
from lean.config.settings import APP_NAME, EDITOR_ENV
from lean.version import get_version

log = get_logger(__name__)


DESCRIPTION = "Keep track of your tasks as YAML files in a workspace directory."

EPILOG = f"""
commands:
  init [DIR]                    create a workspace in DIR (default: current directory)
  tasks add [-d DIR] [-s SUB]   write a new task in ${EDITOR_ENV} and save it
  tasks list [-d DIR] [LIMIT]   list tasks, at most LIMIT of them
  tasks show [-d DIR] ID...     show tasks by path, file name or title
  help                          show this help
"""


class ArgumentError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    """
    Raises on bad arguments instead of exiting, so errors are reported in one place.
    """

    def error(self, message):
        raise ArgumentError(f"{self.prog}: {message}")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=APP_NAME,
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("--version", action="store_true", help="print the version and exit")
    parser.add_argument("-h", "--help", action="store_true", help="show this help and exit")
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    init_parser = commands.add_parser("init", help="create a new workspace")
    init_parser.add_argument("dir", nargs="?", metavar="DIR", help="workspace directory")

    commands.add_parser("help", help="show this help")

    tasks_parser = commands.add_parser("tasks", help="add, list and show tasks")
    tasks_commands = tasks_parser.add_subparsers(dest="tasks_command", metavar="TASKS_COMMAND")

    dir_help = "a directory within the workspace (default: current directory)"

    add_parser = tasks_commands.add_parser("add", help="write a new task in your editor")
    add_parser.add_argument("-d", "--dir", metavar="DIR", help=dir_help)
    add_parser.add_argument(
        "-s", "--subdir", metavar="SUB", help="existing subdirectory of tasks/ to save into"
    )

    list_parser = tasks_commands.add_parser("list", help="list tasks")
    list_parser.add_argument("-d", "--dir", metavar="DIR", help=dir_help)
    list_parser.add_argument("limit", nargs="?", type=int, metavar="LIMIT", help="maximum tasks")

    show_parser = tasks_commands.add_parser("show", help="show tasks in full")
    show_parser.add_argument("-d", "--dir", metavar="DIR", help=dir_help)
    show_parser.add_argument("ids", nargs="+", metavar="ID", help="task to show")

    return parser


def _dispatch(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    from lean.commands import task_commands, workspace_commands

    if args.command == "init":
        workspace_commands.init(args.dir)
    elif args.command == "tasks":
        if args.tasks_command == "add":
            task_commands.add(args.dir, args.subdir)
        elif args.tasks_command == "list":
            task_commands.list_tasks(args.dir, args.limit)
        elif args.tasks_command == "show":
            task_commands.show(args.ids, args.dir)
        else:
            raise ArgumentError(f"{APP_NAME} tasks: expected one of: add, list, show")
    else:
        parser.print_help()


def run(argv: List[str]) -> int:
    """
    Run a command and return its exit status.
    """
    from lean.shell_tools.exception_printing import report_exception

    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except ArgumentError as e:
        print(e, file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 2

    if args.version:
        print(f"{APP_NAME} {get_version()}")
        return 0
    if args.help or args.command in (None, "help"):
        parser.print_help()
        return 0

    log.info("Running command: %s", argv)
    try:
        _dispatch(args, parser)
    except ArgumentError as e:
        print(e, file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 2
    except KeyboardInterrupt:
        log.message("Interrupted.")
        return 130
    except Exception as e:
        return report_exception(e, lambda: parser.print_usage(sys.stderr))

    return 0


def main(argv: Optional[List[str]] = None):
    logging_setup()
    sys.exit(run(sys.argv[1:] if argv is None else argv))


if __name__ == "__main__":
    main()
