"""Top-level package for the Budget Dashboard.

The primary modules are:

* ``valuation`` – cost, revenue and net profit calculations for budgets
* ``policy`` – the PV-tier gate applied before valuing a budget
* ``api`` – client for the remote budget API and PDF service
* ``dashboard`` – the Streamlit list page; other pages live in ``pages/``

To run the dashboard from the command line you can execute:

```bash
streamlit run budget_dashboard/Home.py
```

or use ``run_dashboard.py`` at the repository root.
"""

from . import policy  # noqa: F401  # re-exported for convenience
from . import valuation  # noqa: F401  # re-exported for convenience

__all__ = ["policy", "valuation"]
