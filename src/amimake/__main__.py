import sys

from amimake.convert import main

sys.exit(main())
