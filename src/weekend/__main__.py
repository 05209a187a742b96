import sys

from weekend.main import main

sys.exit(main())
