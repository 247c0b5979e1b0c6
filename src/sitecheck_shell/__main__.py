import sys

from sitecheck_shell.app import main

sys.exit(main())
