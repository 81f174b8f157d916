import sys

from tma.cli import main

sys.exit(main())
