"""Allow ``python -m autoflutter``."""

import sys

from autoflutter.main import main

sys.exit(main())
