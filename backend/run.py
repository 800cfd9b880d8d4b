#!/usr/bin/env python3
# backend/run.py
"""
Development server runner.

Creates the tables and seeds the reference catalog before starting uvicorn
with auto-reload. Pass ``--demo`` to also load demo instructors.
"""
import os
from pathlib import Path
import sys

# Add backend to path
backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))
os.chdir(backend_dir)

import uvicorn

from raven.commands.seed import main as seed_main

if __name__ == "__main__":
    seed_args = ["--demo"] if "--demo" in sys.argv[1:] else []
    if seed_main(seed_args) != 0:
        sys.exit(1)

    print("Starting Raven development server...")
    print("Access at: http://localhost:8000")
    print("API Docs: http://localhost:8000/docs")

    uvicorn.run("raven.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
