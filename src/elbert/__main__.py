import sys

from elbert.cli import main

sys.exit(main())
