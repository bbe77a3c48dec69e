"""Allow ``python -m farm_keeper``."""
from .cli import main

if __name__ == "__main__":
    main()
