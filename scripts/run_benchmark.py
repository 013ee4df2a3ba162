#!/usr/bin/env python3
"""
Run Benchmark Script

Thin wrapper around credit_risk_bench.cli for running from a checkout.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from credit_risk_bench.cli import main


if __name__ == "__main__":
    sys.exit(main())
