"""
Entry Point Script (Bootstrap)
==============================
Starts the application from a source checkout without installing it.

It lives outside the 'src' package and puts 'src' on 'sys.path' so that
'surfacegrapher' resolves.

Usage:
    $ python run.py
"""
import os
import sys

current_dir: str = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.join(current_dir, "src"))

from surfacegrapher.app import APP_ID
from surfacegrapher.main import main

try:
    import ctypes
    # own taskbar group on Windows instead of python.exe
    ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID(APP_ID)
except (AttributeError, ImportError):
    pass

if __name__ == "__main__":
    main()
