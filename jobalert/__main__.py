import sys

from jobalert.main import main

sys.exit(main())
