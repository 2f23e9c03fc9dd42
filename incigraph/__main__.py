import sys

from incigraph.cli import main

sys.exit(main())
