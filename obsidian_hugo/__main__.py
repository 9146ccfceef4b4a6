import sys

from obsidian_hugo.cli import main

if __name__ == "__main__":
    sys.exit(main())
