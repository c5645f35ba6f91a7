"""
Auth Routes
===========

Login surface the Session Guard redirects to.
"""

from flask import flash, jsonify, redirect, request

from . import auth_bp


def _folio():
    from ... import current_folio
    return current_folio()


@auth_bp.route('/login', methods=['GET', 'POST'])
async def login():
    """Admin login route"""
    next_page = request.args.get('next')

    if request.method == 'GET':
        return jsonify({'login': True, 'fields': ['email', 'password'], 'next': next_page})

    data = request.get_json(silent=True) or request.form
    email = data.get('email', '')
    password = data.get('password', '')

    if not email or not password:
        return jsonify({'error': 'Please enter both email and password'}), 400

    session = await _folio().auth.sign_in(email, password)
    if session is None:
        return jsonify({'error': 'Invalid email or password'}), 401

    if request.is_json:
        return jsonify({'success': True, 'user_id': session.user_id, 'email': session.email})

    flash('Login successful', 'success')
    return redirect(next_page or '/admin/')
