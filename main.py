#!/usr/bin/env python3
"""ScoreMap — entry point.

Run with:
    python main.py
    python -m scoremap
"""

from scoremap.__main__ import main


if __name__ == "__main__":
    main()
