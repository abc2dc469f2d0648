import sys

from emr_manager.main import main

sys.exit(main())
