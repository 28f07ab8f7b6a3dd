import sys

from .fetch_fact_series import main

sys.exit(main())
