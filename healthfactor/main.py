#!/usr/bin/env python3
"""
Aave Health Factor Calculator
Entry point for ``python -m healthfactor.main``
"""
from .cli import main

if __name__ == "__main__":
    main()
