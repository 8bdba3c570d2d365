"""Allow running hartools with python -m hartools."""

from .cli import main

if __name__ == '__main__':
    main()
