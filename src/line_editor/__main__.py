import sys

from line_editor.cli import main

sys.exit(main())
