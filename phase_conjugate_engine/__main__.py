"""Allow ``python -m phase_conjugate_engine``."""

import sys

from phase_conjugate_engine.main import main

if __name__ == "__main__":
    sys.exit(main())
