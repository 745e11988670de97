from pathlib import Path
from typing import Optional

from lean.config.logger import get_logger
from lean.shell.shell_output import cprint, print_success
from lean.util.format_utils import fmt_lines, fmt_path
from lean.workspaces.workspaces import init_workspace, Workspace

log = get_logger(__name__)


def init(dir: Optional[str] = None) -> Workspace:
    """
    Create a new workspace in the given directory (by default the current directory).
    The directory is created if needed and must otherwise be empty.
    """
    target = Path(dir) if dir else Path(".")
    ws = init_workspace(target)

    print_success("Created workspace: %s", fmt_path(ws.base_dir))
    cprint(fmt_lines(f"{p}/" for p in ws.dirs.skeleton_dirs()))
    return ws
