import sys

from rentalclient.cli import main

sys.exit(main())
