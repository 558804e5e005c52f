"""
Entry point for running the composerkit CLI as a module.

Usage: python -m composerkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
