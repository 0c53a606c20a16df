import sys

from rain_city.main import main

if __name__ == "__main__":
    sys.exit(main())
