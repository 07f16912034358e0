"""Server entry point for uvicorn."""

import os

import uvicorn

from lifesim_server.app_factory import DEFAULT_API_PORT, create_app

# The global 'app' is what uvicorn looks for
app = create_app()


def main() -> None:
    """Run the application with uvicorn."""
    port = int(os.getenv("LIFESIM_API_PORT", str(DEFAULT_API_PORT)))
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="info")


if __name__ == "__main__":
    main()
