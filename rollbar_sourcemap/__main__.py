import sys

from rollbar_sourcemap.cli import main

sys.exit(main())
