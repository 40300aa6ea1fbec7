"""Allow running flom with `python -m flom`."""

from flom.cli import main

if __name__ == "__main__":
    main()
