# dashboard_main.py (root level)
"""
Club Administration Dashboard - Main Entry Point

Run with: streamlit run dashboard_main.py
"""

import sys
import os
from pathlib import Path

# Make the src package importable when run from any directory
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from src.dashboard.app import main

if __name__ == "__main__":
    os.environ.setdefault('STREAMLIT_THEME_BASE', 'light')

    main()
