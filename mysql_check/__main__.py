import sys

from mysql_check.cli import main

sys.exit(main())
