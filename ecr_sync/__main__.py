import sys

from ecr_sync.main import main

sys.exit(main())
