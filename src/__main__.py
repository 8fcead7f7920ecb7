import sys

from tailscan.cli import main

sys.exit(main())
