import sys

from greplite.cli import main

sys.exit(main())
