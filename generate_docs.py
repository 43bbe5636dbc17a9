"""CLI shim -- delegates to docbundle.cli.main().

Usage:
    python generate_docs.py
    python generate_docs.py --root path/to/project --keep-output
"""

from docbundle.cli import main

if __name__ == "__main__":
    main()
