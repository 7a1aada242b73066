import sys

from .cli_driver import main

sys.exit(main())
