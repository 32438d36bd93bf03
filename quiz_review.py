from config import configure_logging
from dashboard.ui import run_dashboard

if __name__ == "__main__":
    configure_logging()
    run_dashboard()
