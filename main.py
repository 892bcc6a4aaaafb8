"""
FastAPI app: Clef login demo.

Decisions:
- .env is loaded before importing clef_auth so CLEF_* and SESSION_SECRET are
  available when the app is built (Ruff E402 suppressed for that).
- One ClefAPI is created in create_app and injected into the handlers; there is
  no process-wide client.
- Run with: uvicorn main:app --port 5000 (the redirect URL registered with Clef
  defaults to http://localhost:5000/oauth_callback).
"""

from dotenv import load_dotenv

load_dotenv()

# Load .env before clef_auth so CLEF_* and SESSION_SECRET are set; Ruff E402.
from clef_auth import Settings, create_app  # noqa: E402
from clef_auth.config import configure_logging  # noqa: E402

settings = Settings.from_env()
configure_logging(settings.debug)

app = create_app(settings)
