import sys

from game_troubleshooter.troubleshoot_client import main

sys.exit(main())
