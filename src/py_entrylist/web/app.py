"""Flask application factory for the entry-list HTTP front end.

The ``create_app`` function wraps one shared ``EntryList`` (and an
optional backing file) in a Flask app with these endpoints:

- ``GET /api/params`` — echo the request's query parameters as entries.
- ``GET /api/entries`` — list every entry.
- ``GET /api/entries/<name>`` — look up one name (``?match=first|last|nocase``).
- ``POST /api/entries`` — insert ``{"name", "value", "replace"?}``.
- ``DELETE /api/entries/<name>`` — remove every entry with that name.
- ``POST /api/entries/reverse`` — reverse the list in place.
- ``POST /api/save`` / ``POST /api/load`` — persist to / reload from the store.
- ``GET /api/log`` — the application's log lines (``?level=``, ``?source=``).
- ``DELETE /api/log`` — empty the log.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from urllib.parse import parse_qsl

from flask import Flask, Response, jsonify, request

from py_entrylist.entries import Entry, EntryList, InsertMode, MatchMode
from py_entrylist.logging import Logger, LogLevel
from py_entrylist.persistence import load_entries, save_entries

_HTTP_CREATED = 201
_HTTP_BAD_REQUEST = 400
_HTTP_NOT_FOUND = 404
_HTTP_INTERNAL_SERVER_ERROR = 500

_SOURCE = "web"


def _render(entries: EntryList) -> Response:
    """Serialize a whole list as JSON."""
    return jsonify({"entries": [list(pair) for pair in entries.items()], "count": len(entries)})


def _error(message: str, status: int) -> tuple[Response, int]:
    return jsonify({"error": message}), status


def _json_object() -> dict[str, Any] | None:
    """Return the request body if it is a JSON object, else None."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def create_app(entries: EntryList | None = None, store: Path | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        entries: The list to serve (a new empty list if omitted).
        store: File used by the save and load endpoints.

    Returns:
        A configured Flask application ready to serve.

    """
    state = {"entries": entries if entries is not None else EntryList()}
    logger = Logger()

    app = Flask(__name__)
    app.config["ENTRY_STORE"] = store

    def current() -> EntryList:
        return state["entries"]

    @app.route("/api/params")
    def params() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the query parameters in request order, repeated names included."""
        query = request.query_string.decode("utf-8", errors="replace")
        return _render(EntryList.from_pairs(parse_qsl(query, keep_blank_values=True)))

    @app.route("/api/entries")
    def list_entries() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return every entry in order."""
        return _render(current())

    @app.route("/api/entries/<name>")
    def lookup(name: str) -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Look up *name* with the requested match mode."""
        try:
            match = MatchMode(request.args.get("match", MatchMode.FIRST))
        except ValueError:
            return _error(f"Unknown match mode: {request.args['match']}", _HTTP_BAD_REQUEST)

        value = current().value(name, match)
        if value is None:
            return _error(f"No entry named '{name}'", _HTTP_NOT_FOUND)
        return jsonify(
            {
                "name": name,
                "value": value,
                "int_value": current().int_value(name, match),
                "position": current().position(name),
            }
        )

    @app.route("/api/entries", methods=["POST"])
    def insert() -> tuple[Response, int]:  # pyright: ignore[reportUnusedFunction]
        """Insert an entry from a JSON body.

        Expects JSON body: ``{"name": "...", "value": "...", "replace": false}``
        """
        data = _json_object()
        if data is None or "name" not in data or "value" not in data:
            return _error("Missing 'name' or 'value' field", _HTTP_BAD_REQUEST)

        mode = InsertMode.REPLACE if data.get("replace") else InsertMode.APPEND
        entry: Entry | None = current().add(str(data["name"]), str(data["value"]), mode)
        if entry is None:
            return _error("Entry name must not be empty", _HTTP_BAD_REQUEST)

        logger.log(LogLevel.DEBUG, f"{mode} {entry.name}", source=_SOURCE)
        return jsonify({"name": entry.name, "value": entry.value}), _HTTP_CREATED

    @app.route("/api/entries/<name>", methods=["DELETE"])
    def remove(name: str) -> Response:  # pyright: ignore[reportUnusedFunction]
        """Remove every entry named *name*."""
        removed = current().remove(name)
        logger.log(LogLevel.DEBUG, f"removed {removed} x {name}", source=_SOURCE)
        return jsonify({"removed": removed})

    @app.route("/api/entries/reverse", methods=["POST"])
    def reverse() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Reverse the list in place."""
        current().reverse()
        return _render(current())

    @app.route("/api/save", methods=["POST"])
    def save() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Write the list to the configured store."""
        path: Path | None = app.config["ENTRY_STORE"]
        if path is None:
            return _error("No store configured", _HTTP_BAD_REQUEST)

        data = _json_object() or {}
        count = save_entries(current(), path, encode_values=bool(data.get("encode")), logger=logger)
        if count < 0:
            return _error(f"Cannot save to {path}", _HTTP_INTERNAL_SERVER_ERROR)
        return jsonify({"saved": count})

    @app.route("/api/load", methods=["POST"])
    def load() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Replace the list with the contents of the configured store."""
        path: Path | None = app.config["ENTRY_STORE"]
        if path is None:
            return _error("No store configured", _HTTP_BAD_REQUEST)

        data = _json_object() or {}
        loaded = load_entries(path, decode_values=bool(data.get("decode")), logger=logger)
        if loaded is None:
            return _error(f"Cannot load from {path}", _HTTP_INTERNAL_SERVER_ERROR)
        state["entries"] = loaded
        return _render(loaded)

    @app.route("/api/log")
    def log() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return log lines, oldest first.

        Optional query parameters: ``level`` (debug, info, warning, error)
        keeps records at or above that level; ``source`` keeps one component.
        """
        level_name = request.args.get("level")
        min_level = None
        if level_name is not None:
            try:
                min_level = LogLevel[level_name.upper()]
            except KeyError:
                return _error(f"Unknown log level: {level_name}", _HTTP_BAD_REQUEST)

        records = logger.filter(min_level=min_level, source=request.args.get("source"))
        return jsonify({"lines": [str(r) for r in records]})

    @app.route("/api/log", methods=["DELETE"])
    def clear_log() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Empty the log buffer."""
        logger.clear()
        return jsonify({"lines": []})

    return app
