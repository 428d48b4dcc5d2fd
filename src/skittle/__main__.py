import sys

from skittle.cli import main

sys.exit(main())
