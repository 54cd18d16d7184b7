import sys

from pumplog.agent.run import main

sys.exit(main())
