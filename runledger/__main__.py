import sys

from runledger.main import main

sys.exit(main())
