import sys

from pi.repl.cli import main

sys.exit(main())
