import sys

from .datasets_fetcher import main

sys.exit(main())
