"""Allow ``python -m findup``."""

from findup.main import main

raise SystemExit(main())
