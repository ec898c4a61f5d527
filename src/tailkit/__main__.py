import sys

from .tail import main

if __name__ == "__main__":
    sys.exit(main())
