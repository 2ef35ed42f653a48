"""Allow ``python -m wiremockqa``."""

from wiremockqa.cli import main

if __name__ == "__main__":
    main()
