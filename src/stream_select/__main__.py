import sys

from stream_select.cli import main

sys.exit(main())
