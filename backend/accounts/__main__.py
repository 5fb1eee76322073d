import sys

from accounts.main import main

sys.exit(main())
