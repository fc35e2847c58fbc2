"""Run the console game: python -m console_ui"""

import sys

from console_ui.app import main

sys.exit(main())
