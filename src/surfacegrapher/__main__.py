"""Run with: python -m surfacegrapher"""
from surfacegrapher.main import main

if __name__ == "__main__":
    main()
