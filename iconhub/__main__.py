# iconhub/__main__.py
import sys

from iconhub.cli import main

sys.exit(main())
