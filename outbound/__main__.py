import sys

from outbound.cli import main

sys.exit(main())
