"""
Response envelope helpers: {status, message, data?}.
"""

from typing import Any
from flask import jsonify


def success_response(message: str, data: Any = None, status_code: int = 200):
    body = {
        'status': 'success',
        'message': message,
    }
    if data is not None:
        body['data'] = data
    return jsonify(body), status_code


def error_response(message: str, status_code: int):
    return jsonify({
        'status': 'error',
        'message': message,
    }), status_code
