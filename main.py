import os
import sys

# Allow `python main.py <command>` from a source checkout
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from calendly_cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
