"""CLI entry point: python -m installed_check"""

from installed_check.cli import main

main()
