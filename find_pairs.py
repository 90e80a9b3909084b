"""
Find the word pairs of a text that together use the most distinct characters.

Usage:
    python find_pairs.py
    python find_pairs.py -f alastalon_salissa.txt -c abcdefghijklmnopqrstuvwzyxåäö

Any plain text or HTML file can be passed with -f.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from muhkeat.pair_cli import main


if __name__ == "__main__":
    main()
