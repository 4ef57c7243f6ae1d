import uvicorn

from contact_intake.core.app_factory import create_app

app = create_app()


def run() -> None:
    """Serve the app with uvicorn (``contact-intake`` console script)."""
    uvicorn.run("contact_intake.main:app", host="0.0.0.0", port=8000)
