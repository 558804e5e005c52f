"""
Entry point for running the composerkit CLI as a module.

Usage: python -m composerkit [command] [options]
"""

from composerkit.cli.parser import main

if __name__ == "__main__":
    main()
