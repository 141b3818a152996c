import sys

from clippie.main import main

sys.exit(main())
