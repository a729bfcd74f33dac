import sys

from rmfeas.cli import main

sys.exit(main())
