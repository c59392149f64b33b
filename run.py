#!/usr/bin/env python
"""Entry point for leadmerge CLI."""

# Load .env file before anything else
from dotenv import load_dotenv
load_dotenv()

from leadmerge.core.cli import main

if __name__ == "__main__":
    main()
