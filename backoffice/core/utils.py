"""
Request helpers shared by the admin JSON endpoints.
"""

from flask import request


def json_body():
    """The request's JSON object, or {} when the body is missing or not an object"""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
