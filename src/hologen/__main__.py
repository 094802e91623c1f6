"""Run with: python -m hologen"""
from hologen.main import main

if __name__ == "__main__":
    main()
