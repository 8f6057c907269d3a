from dataclasses import dataclass, field
from typing import Optional

from .. import config
from ..session import Workspace


@dataclass
class ReplContext:
    """Holds the state of the interactive REPL session."""
    workspace: Workspace = field(default_factory=Workspace)
    points: int = config.DEFAULT_POINTS
    output_format: str = "human"
    debug_mode: bool = False
    last_plot_file: Optional[str] = None
