# grover_sim/__main__.py
from .cli import main

raise SystemExit(main())
