#!/usr/bin/env python3
"""
Data Hashing Record Authentication demo

Usage:
    python scripts/hash_auth.py check
    python scripts/hash_auth.py add [--static]
    python scripts/hash_auth.py test
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from blockchain.cli import main

if __name__ == '__main__':
    sys.exit(main())
