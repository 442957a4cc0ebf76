#!/usr/bin/env python3
"""
EduConfig - Application Entry Point
Lublin University of Technology

Main entry point script that sets up the Python path and launches the application.
This script should be run from the project root directory.
"""

import sys
from pathlib import Path

# Get the directory containing this script (project root)
PROJECT_ROOT = Path(__file__).parent

# Add project root to Python path so we can import src as a package
sys.path.insert(0, str(PROJECT_ROOT))


def main():
    """Main entry point"""
    try:
        import src.main

    except ImportError as e:
        print(f"Import error: {e}", file=sys.stderr)
        print("Install dependencies with: pip install .", file=sys.stderr)
        return 16  # ExitCode.UnhandledException

    return src.main.main()


if __name__ == "__main__":
    sys.exit(main())
