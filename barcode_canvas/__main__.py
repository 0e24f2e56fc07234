"""
Module entrypoint for `python -m barcode_canvas`.

This allows running the application as a module from the repository root:
    python -m barcode_canvas
"""
from barcode_canvas.app import main

if __name__ == "__main__":
    main()
