"""Allow ``python -m coin_rates``."""
from .cli import main

if __name__ == "__main__":
    main()
