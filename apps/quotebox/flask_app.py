"""Development server entry point.

``flask --app flask_app run`` picks up :data:`app`; running the module
directly binds to ``QUOTEBOX_HOST``/``QUOTEBOX_PORT`` from :mod:`quotebox_web.config`.
"""

from __future__ import annotations

from quotebox_web import create_app

app = create_app()


if __name__ == "__main__":
    app.run(
        host=app.config["QUOTEBOX_HOST"],
        port=app.config["QUOTEBOX_PORT"],
        debug=app.debug,
    )
