"""Run the timeline export API with Flask's development server."""

from __future__ import annotations

import logging
import os

from timeline_export import create_app

logging.basicConfig(
    level=os.environ.get("TIMELINE_EXPORT_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()


if __name__ == "__main__":
    debug = os.environ.get("FLASK_ENV", "production") != "production"
    app.run(
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", 5000)),
        debug=debug,
        use_reloader=debug,
    )
