import sys

from website.server import main

sys.exit(main())
