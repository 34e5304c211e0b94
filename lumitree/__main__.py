import sys

from lumitree.app.main import main

sys.exit(main())
