import sys

from kubeplex.main import main

sys.exit(main())
