import sys

from managerboot.cli import main

sys.exit(main())
