"""Entry point: python -m circlesight"""

from circlesight.main import main

if __name__ == "__main__":
    main()
