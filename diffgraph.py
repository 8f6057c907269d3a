#!/usr/bin/env python3
"""
DiffGraph: derivatives and tangent lines of a single-variable function

Main entry point for the DiffGraph application.
This file serves as a thin wrapper that delegates all functionality
to the diffgraph_pkg package.

Usage:
    python diffgraph.py                         # Interactive REPL
    python diffgraph.py -e "sin(x)" -n 5        # Print tangent lines and exit
    python diffgraph.py -e "x^2" --save out.png # Also save the plot grid
    python diffgraph.py --help                  # Show help

Terminal command for Streamlit:
    streamlit run streamlit_app.py
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for DiffGraph.

    Delegates all functionality to the diffgraph_pkg.cli module,
    which handles argument parsing, formula evaluation, and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from diffgraph_pkg.cli import main_entry

        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1
    except ImportError as e:
        print(f"Error: Failed to import diffgraph_pkg: {e}")
        print("Please ensure all dependencies are installed: pip install -e .")
        return 1


if __name__ == "__main__":
    sys.exit(main())
