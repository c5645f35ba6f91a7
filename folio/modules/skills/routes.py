"""
Skills Admin Routes
===================
"""

from flask import jsonify, request

from . import skills_bp
from ...core.responses import controller_response
from ..auth.guard import admin_api_required


def _controller():
    from ... import current_folio
    return current_folio().controllers()['skills']


@skills_bp.route('', methods=['GET'])
@admin_api_required
async def list_skills():
    """All skills, plus the category grouping"""
    controller = _controller()
    ok = await controller.load()
    return controller_response(controller, ok)


@skills_bp.route('', methods=['POST'])
@admin_api_required
async def create_skill():
    controller = _controller()
    controller.begin_create()
    controller.update_form(request.get_json(silent=True) or {})
    ok = await controller.submit()
    return controller_response(controller, ok)


@skills_bp.route('/<skill_id>', methods=['PUT'])
@admin_api_required
async def update_skill(skill_id):
    controller = _controller()
    if not await controller.load():
        return controller_response(controller, False)
    controller.begin_edit(skill_id)
    controller.update_form(request.get_json(silent=True) or {})
    ok = await controller.submit()
    return controller_response(controller, ok)


@skills_bp.route('/<skill_id>', methods=['DELETE'])
@admin_api_required
async def delete_skill(skill_id):
    """Delete skill; requires ?confirm=1"""
    controller = _controller()
    confirmed = request.args.get('confirm', '').lower() in ('1', 'true', 'yes')
    ok = await controller.remove(skill_id, lambda: confirmed)
    if not ok and controller.last_error is None:
        return jsonify({'error': 'Deletion not confirmed'}), 400
    return controller_response(controller, ok)
