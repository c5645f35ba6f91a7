"""JSON responses for the admin entity routes."""

from flask import jsonify


def controller_response(controller, ok=True, **extra):
    """Controller view plus drained notices; failures answer with the error's status"""
    body = controller.view()
    body['success'] = ok
    body['notices'] = controller.notices.drain()
    body.update(extra)

    if ok:
        return jsonify(body)
    error = controller.last_error
    if error is not None:
        body['error'] = str(error)
        return jsonify(body), error.status_code
    return jsonify(body), 400
