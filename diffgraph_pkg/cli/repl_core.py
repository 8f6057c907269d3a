import logging
from typing import Optional

from .. import config
from ..expression import format_expression
from ..layout import clamp_point_count
from ..sampling import tangent_lines
from ..types import DiffGraphError
from ..utils.formatting import format_fixed
from ..utils.formatting import format_value
from .commands import handle_debug_command
from .context import ReplContext

logger = logging.getLogger(__name__)

HELP_TEXT = """\
Enter a formula in x to make it the current function, e.g. sin(x) or x^3 - 2*x.
Operators: + - * / ^   Functions: sin cos tan exp log sqrt abs sign
           asin acos atan sinh cosh tanh   Constants: pi e

Commands:
  show            Print the current function, derivative and tangent lines
  points N        Set the number of tangent points (2-9)
  plot [FILE]     Save the tangent grid (default: diffgraph.png)
  debug on|off    Toggle debug logging and the raw derivative
  help            Show this message
  quit            Exit"""


def caret_line(text: str, position: Optional[int]) -> Optional[str]:
    """Line pointing at ``position`` under ``text`` (indented like the prompt)."""
    if position is None or position > len(text):
        return None
    return "    " + " " * position + "^"


class REPL:
    """
    Interactive loop: one formula or command per line.
    A rejected formula leaves the current one in place.
    """
    def __init__(self, context: Optional[ReplContext] = None):
        self.ctx = context if context else ReplContext()
        self.running = True

    def start(self):
        """Main loop entry point."""
        print(f"diffgraph v{config.VERSION} — type 'help' for commands, 'quit' to exit.")
        self.submit(config.DEFAULT_FORMULA)

        while self.running:
            self.loop_once()

    def loop_once(self):
        """Single iteration of the read-eval-print loop."""
        try:
            prompt = ">>> " if not self.ctx.debug_mode else "DEBUG>>> "
            try:
                raw = input(prompt)
            except EOFError:
                self.running = False
                return

            self.process_input(raw)
        except KeyboardInterrupt:
            print("\n[Interrupted]")
        except Exception as e:
            logger.exception("Unexpected error in REPL loop")
            print(f"Error: {e}")

    def process_input(self, text: str):
        """Dispatch input to specific handlers."""
        text = text.strip()
        if not text or text.startswith("#"):
            return

        command, _, argument = text.partition(" ")
        command = command.lower()
        argument = argument.strip()

        if command in ("quit", "exit"):
            self.running = False
        elif command == "help":
            print(HELP_TEXT)
        elif command == "show":
            self.show()
        elif command == "points":
            self.set_points(argument)
        elif command == "plot":
            self.plot(argument or "diffgraph.png")
        elif command == "debug":
            handle_debug_command(self.ctx, text)
        else:
            self.submit(text)

    def submit(self, text: str):
        result = self.ctx.workspace.submit(text)
        if result.ok:
            self.print_session()
            return

        error = result.error
        print(f"Error: {error}")
        caret = caret_line(text.strip(), error.position)
        if caret is not None:
            print(f"    {text.strip()}")
            print(caret)
        if result.session is not None:
            print(f"Keeping f(x) = {result.session.text}")

    def print_session(self):
        session = self.ctx.workspace.session
        if session is None:
            print("No function defined yet.")
            return
        print(f"Current function: f(x) = {session.text}")
        print(f"Derivative: f'(x) = {session.derivative_text}")
        if self.ctx.debug_mode:
            print(f"Raw derivative: {format_expression(session.derivative)}")

    def show(self):
        session = self.ctx.workspace.session
        self.print_session()
        if session is None:
            return
        for tangent in tangent_lines(session, self.ctx.points):
            print(
                f"  x = {format_fixed(tangent.dot)}: "
                f"f = {format_value(tangent.value)}, {tangent.label}"
            )

    def set_points(self, argument: str):
        if not argument:
            print(f"Number of points: {self.ctx.points}")
            return
        self.ctx.points = clamp_point_count(argument)
        print(f"Number of points: {self.ctx.points}")

    def plot(self, path: str):
        session = self.ctx.workspace.session
        if session is None:
            print("No function defined yet.")
            return
        from ..plotting import render_session
        from ..plotting import save_figure

        try:
            save_figure(render_session(session, self.ctx.points), path)
        except (OSError, DiffGraphError) as e:
            print(f"Error: Could not save plot: {e}")
            return
        self.ctx.last_plot_file = path
        print(f"Plot saved to: {path}")
