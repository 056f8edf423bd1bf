import sys

from ipgeo.cli import main

sys.exit(main())
