"""providerbridge command-line entry point.

    python -m providerbridge --help
"""

from providerbridge.cli import main

if __name__ == "__main__":
    main()
