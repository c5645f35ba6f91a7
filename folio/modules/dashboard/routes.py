"""
Admin Dashboard Routes
======================
"""

from flask import flash, jsonify, redirect, request, url_for

from . import dashboard_bp
from ...core.notices import NoticeBoard
from ..auth.guard import FORBIDDEN, UNAUTHENTICATED, SessionGuard
from .shell import TABS, DashboardShell


def build_shell():
    from ... import current_folio
    folio = current_folio()
    notices = NoticeBoard()
    controllers = folio.controllers(notices)
    return DashboardShell(
        SessionGuard(folio.auth, folio.admin_role),
        folio.auth,
        controllers['projects'],
        controllers['settings'],
        controllers['skills'],
        notices,
        login_url=url_for('auth.login', next=request.path),
        home_url='/',
    )


@dashboard_bp.route('/')
@dashboard_bp.route('/dashboard')
async def dashboard():
    """Admin dashboard - all three tabs, loaded at mount"""
    shell = build_shell()
    result = await shell.mount()

    if result.reason == UNAUTHENTICATED:
        return redirect(result.redirect_to)
    if result.reason == FORBIDDEN:
        for notice in shell.notices.drain():
            flash(notice['description'], 'error')
        return redirect(result.redirect_to)

    tab = request.args.get('tab')
    if tab in TABS:
        shell.switch_tab(tab)
    return jsonify(shell.view())


@dashboard_bp.route('/logout')
async def logout():
    """Sign out and go home"""
    home = await build_shell().sign_out()
    flash('You have been logged out', 'info')
    return redirect(home)
