"""
Entry Point Script (Bootstrap)
==============================
Starts the visualiser from a source checkout without installing it.

It is located outside the 'src' package and puts 'src' on the Python path
so `from quakeviz...` imports resolve.

Usage:
    $ python run.py [--mode geographic] [--demo]
"""
import sys
import os

current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from quakeviz.main import main

if __name__ == "__main__":
    sys.exit(main())
