"""
Projects Admin Routes
=====================
"""

from flask import jsonify, request

from . import projects_bp
from ...core.responses import controller_response
from ...core.storage import allowed_file
from ..auth.guard import admin_api_required


def _controller():
    from ... import current_folio
    return current_folio().controllers()['projects']


def _confirmed():
    return request.args.get('confirm', '').lower() in ('1', 'true', 'yes')


@projects_bp.route('', methods=['GET'])
@admin_api_required
async def list_projects():
    """Get all projects, ordered by order_index"""
    controller = _controller()
    ok = await controller.load()
    return controller_response(controller, ok)


@projects_bp.route('', methods=['POST'])
@admin_api_required
async def create_project():
    """Create new project"""
    controller = _controller()
    controller.begin_create()
    controller.update_form(request.get_json(silent=True) or {})
    ok = await controller.submit()
    return controller_response(controller, ok)


@projects_bp.route('/<project_id>', methods=['PUT'])
@admin_api_required
async def update_project(project_id):
    """Update project (full-field)"""
    controller = _controller()
    if not await controller.load():
        return controller_response(controller, False)
    controller.begin_edit(project_id)
    controller.update_form(request.get_json(silent=True) or {})
    ok = await controller.submit()
    return controller_response(controller, ok)


@projects_bp.route('/<project_id>', methods=['DELETE'])
@admin_api_required
async def delete_project(project_id):
    """Delete project; requires ?confirm=1"""
    controller = _controller()
    ok = await controller.remove(project_id, _confirmed)
    if not ok and controller.last_error is None:
        return jsonify({'error': 'Deletion not confirmed'}), 400
    return controller_response(controller, ok)


@projects_bp.route('/upload-image', methods=['POST'])
@admin_api_required
async def upload_image():
    """Upload an image into the pending project form; the project is not saved"""
    if 'image' not in request.files:
        return jsonify({'error': 'No image file provided'}), 400

    file = request.files['image']
    if file.filename == '':
        return jsonify({'error': 'No file selected'}), 400
    if not allowed_file(file.filename):
        return jsonify({'error': 'Invalid file type'}), 400

    controller = _controller()
    project_id = request.form.get('id')
    if project_id:
        if not await controller.load():
            return controller_response(controller, False)
        controller.begin_edit(project_id)
    else:
        controller.begin_create()
    controller.update_form(request.form.to_dict())

    image_url = await controller.upload_image(file.filename, file.read())
    return controller_response(controller, image_url is not None, image_url=image_url)
