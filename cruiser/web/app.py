from __future__ import annotations

import logging

from flask import Flask, jsonify, redirect, render_template, request, url_for

from cruiser.hardware.registry import PinIOError, PinRegistry, UnknownPinError
from cruiser.paths import TEMPLATES_DIR

logger = logging.getLogger(__name__)


def is_json_request() -> bool:
    return "json" in request.headers.get("Content-Type", "")


def create_app(registry: PinRegistry) -> Flask:
    """
    Build the web front end around `registry`.

    The caller opened the registry and closes it on shutdown.
    """
    app = Flask(__name__, template_folder=str(TEMPLATES_DIR))
    app.extensions["pin_registry"] = registry

    @app.route("/")
    def index():
        """
        Serve the control page, one button per configured pin.
        """
        return render_template("index.html", pins=registry.list_pins())

    @app.route("/switch", methods=["GET"])
    def switch():
        """
        Toggle one pin.

        Query params: pin (identifier from the pin table)
        JSON clients (Content-Type containing "json") get {message, state};
        browsers are redirected back to the control page.
        """
        pin_id = request.args.get("pin", "")
        if not pin_id:
            logger.warning("Url param 'pin' is missing")
            return jsonify({"error": "Missing 'pin' parameter"}), 400

        try:
            pin = registry.lookup(pin_id)
            next_state = registry.toggle_pin(pin)
        except UnknownPinError:
            logger.warning("Switch requested for unknown pin %r", pin_id)
            return jsonify({"error": f"Unknown pin '{pin_id}'"}), 404
        except PinIOError as e:
            logger.exception("Toggle failed for pin %r", pin_id)
            return jsonify({"error": str(e)}), 500

        logger.info("Toggled pin %s (%s), state is now %s", pin.pin_id, pin.name, next_state)

        if is_json_request():
            return jsonify({"message": "ok", "state": next_state})
        return redirect(url_for("index"), code=303)

    @app.route("/api/pins", methods=["GET"])
    def pin_status():
        """
        Endpoint to get the cached state of every pin, in display order.
        """
        return jsonify(
            {
                "pins": [
                    {"pin": p.pin_id, "name": p.name, "state": p.state}
                    for p in registry.list_pins()
                ]
            }
        )

    return app
