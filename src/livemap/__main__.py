import sys

from livemap.cli import main

sys.exit(main())
