import sys

from geolocate import main

sys.exit(main())
