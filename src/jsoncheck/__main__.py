"""
Main entry point for jsoncheck when run as a module.
"""

import sys
from jsoncheck.jsoncheck_cli import main

if __name__ == '__main__':
    sys.exit(main())
