"""
Run the thumbnail resolver API with uvicorn (auto-reload on source changes).
Usage:
  python run_api.py
Environment: APP_HOST, APP_PORT, APP_LOG_LEVEL.
"""
import os
import sys

from uvicorn import run

ROOT = os.path.dirname(os.path.abspath(__file__))
BACKEND_APP_DIR = os.path.join(ROOT, "backend", "app")

if ROOT not in sys.path:
  sys.path.insert(0, ROOT)

if __name__ == "__main__":
  log_level = os.environ.get("APP_LOG_LEVEL", "info").lower()
  run(
    "backend.app.main:app",
    host=os.environ.get("APP_HOST", "0.0.0.0"),
    port=int(os.environ.get("APP_PORT", "8000")),
    reload=True,
    reload_dirs=[BACKEND_APP_DIR],
    log_level=log_level,
    access_log=True,
  )
