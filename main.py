#!/usr/bin/env python
"""CLI for Newsreel."""

from newsreel.cli import main

if __name__ == "__main__":
    main()
