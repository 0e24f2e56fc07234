#!/usr/bin/env python
"""
Launcher script for Barcode Canvas.

Usage from repo root:
    python run_barcode_canvas.py

Alternative:
    python -m barcode_canvas
"""
from barcode_canvas.app import main

if __name__ == "__main__":
    main()
