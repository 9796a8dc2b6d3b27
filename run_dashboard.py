#!/usr/bin/env python3
"""Direct launcher for the Budget Dashboard.

This script launches Streamlit with the budget_dashboard directory as the app root,
enabling automatic page discovery from the pages/ subdirectory.
"""

import os
import subprocess
import sys
from pathlib import Path

# Get the project root and budget_dashboard directory
project_root = Path(__file__).parent.resolve()
budget_dashboard_dir = project_root / "budget_dashboard"

if __name__ == "__main__":
    # Change to budget_dashboard directory so Streamlit can discover pages/
    os.chdir(budget_dashboard_dir)
    # Add project root to path for imports
    sys.path.insert(0, str(project_root))
    subprocess.run([
        sys.executable, "-m", "streamlit", "run",
        "Home.py"
    ])
