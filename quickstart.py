#!/usr/bin/env python3
# quickstart.py
"""
Quick start script for igservices development.
"""

import subprocess
import sys


def main():
    print("igservices Quick Start\n")

    # Python 3.11+ is required (declared in pyproject.toml)
    print(f"Using Python {sys.version}")

    print("Installing igservices in development mode...")
    subprocess.run([sys.executable, "-m", "pip", "install", "-e", ".[dev]"])

    print("Testing installation...")
    subprocess.run([sys.executable, "-m", "igservices.cli", "info"])

    print("Ready to resolve!")
    print("\nTry these commands:")
    print("  igservices info                          # See the resolution order")
    print("  igservices diagnose                      # Check environment")
    print("  python -m pytest tests                   # Run the tests")
    print("\nInspect a guide (igservices.yaml lists canonical, authored, packages, context):")
    print("  igservices fetch Patient/example --config igservices.yaml")
    print("  igservices exists http://loinc.org|2.72 --config igservices.yaml")


if __name__ == "__main__":
    main()
