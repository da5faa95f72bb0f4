import sys

from mutesting_report.cli import main

sys.exit(main())
