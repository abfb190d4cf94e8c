"""HTTP front end for entry lists.

This package provides a Flask application that turns request query
parameters into an ``EntryList`` and exposes list operations as JSON.
It is an **optional** extra — install with::

    pip install py-entrylist[web]

See ``create_app`` in ``app.py`` for the endpoints.
"""
