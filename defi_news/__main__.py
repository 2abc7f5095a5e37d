import sys

from defi_news.main import main

sys.exit(main())
