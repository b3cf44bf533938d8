"""Entry point for running codebrief as a module.

Usage:
    python -m codebrief [command] [options]

Example:
    python -m codebrief analyze --github https://github.com/user/repo
    python -m codebrief check
"""

from codebrief.cli import app

if __name__ == "__main__":
    app()
