"""Allow running with: python -m energyeval STRUCTURE [-c CONFIG]"""
from energyeval.cli import main

raise SystemExit(main())
