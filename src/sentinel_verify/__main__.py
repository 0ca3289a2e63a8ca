"""Allow ``python -m sentinel_verify``."""

from .cli import main

if __name__ == "__main__":
    main()
