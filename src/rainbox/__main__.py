import sys

from rainbox.main import main

if __name__ == "__main__":
    sys.exit(main())
