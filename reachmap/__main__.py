import sys

from reachmap.cli import main

sys.exit(main())
