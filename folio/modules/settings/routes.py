"""
Settings Admin Routes
=====================
"""

from flask import jsonify, request

from . import settings_bp
from ...core.responses import controller_response
from ...core.storage import allowed_file
from ..auth.guard import admin_api_required


def _controller():
    from ... import current_folio
    return current_folio().controllers()['settings']


@settings_bp.route('', methods=['GET'])
@admin_api_required
async def get_settings():
    """Current settings record (null when none saved yet)"""
    controller = _controller()
    ok = await controller.load()
    return controller_response(controller, ok)


@settings_bp.route('', methods=['PUT', 'POST'])
@admin_api_required
async def save_settings():
    """Save settings; insert or update is decided from the loaded record"""
    controller = _controller()
    # Without a successful load the insert/update choice is unknown
    if not await controller.load():
        return controller_response(controller, False)
    controller.update_form(request.get_json(silent=True) or request.form.to_dict())
    ok = await controller.submit()
    return controller_response(controller, ok)


@settings_bp.route('/upload-image', methods=['POST'])
@admin_api_required
async def upload_hero_image():
    """Upload a hero image into the pending settings form; nothing is saved"""
    if 'image' not in request.files:
        return jsonify({'error': 'No image file provided'}), 400

    file = request.files['image']
    if file.filename == '':
        return jsonify({'error': 'No file selected'}), 400
    if not allowed_file(file.filename):
        return jsonify({'error': 'Invalid file type'}), 400

    controller = _controller()
    if not await controller.load():
        return controller_response(controller, False)
    controller.update_form(request.form.to_dict())

    image_url = await controller.upload_image(file.filename, file.read())
    return controller_response(controller, image_url is not None, image_url=image_url)
