#!/usr/bin/env python3
"""
FUDMONSTERS Launcher
=====================
Run this script to start the game.
"""

from fudmonsters.main import main

if __name__ == "__main__":
    main()
